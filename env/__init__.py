"""connect-4 game environment"""
