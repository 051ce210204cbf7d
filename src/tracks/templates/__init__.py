"""Bundled project templates, addressed by forward-slash names under ``project/``."""
