"""Configuration, logging, errors and MongoDB access."""
