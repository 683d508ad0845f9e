"""Generative model providers behind a single complete(prompt) interface."""
