"""Configuration and logging shared by the airspace package."""
