from online_learning.linear_algebra.vector import Vector, VectorLike, as_vector, at, dimension, dot, zero

__all__ = [
    "Vector",
    "VectorLike",
    "as_vector",
    "at",
    "dimension",
    "dot",
    "zero",
]
