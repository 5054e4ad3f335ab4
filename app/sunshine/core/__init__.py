"""Core configuration, paths and theming for sunshine."""
