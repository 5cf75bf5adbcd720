"""Configuration, logging, prompt and text helpers."""
