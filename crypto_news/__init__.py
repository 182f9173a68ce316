"""Crypto News Reader: fetch, filter and browse cryptocurrency news."""
