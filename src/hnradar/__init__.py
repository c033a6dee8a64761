"""Hacker News in the terminal."""
