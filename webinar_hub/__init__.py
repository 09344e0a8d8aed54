"""Webinar Discovery Hub service."""
