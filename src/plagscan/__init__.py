"""PlagScan - Rabin-Karp plagiarism checking against Wikipedia."""

__version__ = "0.1.0"
