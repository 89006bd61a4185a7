"""Shop watch: post storefront catalog changes to Slack."""

__version__ = "0.1.0"
