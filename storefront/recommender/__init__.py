"""Recommendation module for Storefront.

This module contains the three-tier recommendation engine that derives
product suggestions from a user's order history, search history, or overall
product popularity.
"""
