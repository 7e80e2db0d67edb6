"""Dense linear algebra on NumPy arrays: decompositions, norms, least squares, Krylov methods and LOBPCG."""

__version__ = "0.1.0"