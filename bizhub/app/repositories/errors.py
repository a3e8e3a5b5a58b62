class DuplicateKeyError(Exception):
    """Raised by a repository when storage rejects a row on a uniqueness constraint"""
