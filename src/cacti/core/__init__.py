"""Cacti core: tokens, IR, language pipeline, configuration and errors."""
