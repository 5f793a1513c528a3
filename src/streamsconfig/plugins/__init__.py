"""Pluggable components: built-in serdes and timestamp extractors, and the
instantiator that builds user-named classes for those slots."""
