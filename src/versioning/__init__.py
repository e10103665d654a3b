"""Package specifiers, registry metadata models and version resolution."""
