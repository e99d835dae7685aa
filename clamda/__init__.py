"""Curried, data-last functional helpers with placeholder support."""

version = '0.1.0'
