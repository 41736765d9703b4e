"""User-facing interfaces for Strata."""
