"""Video metadata lookup and download relay service"""
