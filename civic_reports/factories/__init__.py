"""Factories wiring repositories and services together."""
