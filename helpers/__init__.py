"""Pure helpers - formulas and formatting with no I/O."""
