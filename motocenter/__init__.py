"""Moto Center catalog service."""
