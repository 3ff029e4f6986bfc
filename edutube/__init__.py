"""Curation proxy merging YouTube Data API metadata with whitelist, blacklist and watch-history stores."""
