from .reference import reference_descent

__all__ = ["reference_descent"]
