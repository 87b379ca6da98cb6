"""User domain - member profiles, roles and leaderboard"""
