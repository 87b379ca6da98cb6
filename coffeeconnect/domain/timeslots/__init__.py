"""Timeslot domain - posting, booking and removing availability"""
