"""Location domain - venue submission and approval"""
