"""Storefront catalog taxonomy service."""
