"""Announcement domain - community notices"""
