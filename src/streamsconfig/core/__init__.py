"""Core resolution engine: schemas, coercion, prefix layering, the guarantee
cascade, and the StreamsConfig facade that composes them."""
