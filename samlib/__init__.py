"""Small system utilities: formatting, hashing, TEA, glob matching, file walking, processes, networking, threads and a page cache."""

__version__ = "1.0.0"