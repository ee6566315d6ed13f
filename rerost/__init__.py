"""
rerost - Developer workflow tools.

Provides ``fork-dir``, which creates throwaway copy-on-write forks of the
current directory under the system temp area and lists or cleans them.
"""

__version__ = "0.1.0"
__author__ = "rerost"
