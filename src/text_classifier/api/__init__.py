"""HTTP presentation layer for the classifier."""
