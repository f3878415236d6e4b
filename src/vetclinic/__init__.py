"""Veterinary clinic CRUD + auth API."""
