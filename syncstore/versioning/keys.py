"""Version-qualified key derivation."""


def version_key(base_key: str, separator: str, version: int) -> str:
    """
    Build the backend key for one version of a value.

    The result is the plain concatenation base_key + separator + version.
    Nothing checks for collisions: a base key ending in digits combined
    with a one-character separator can alias another base key/version
    pair, so callers must pick separators that cannot occur that way.

    Args:
        base_key: Version-independent identity of the value
        separator: String placed between the base key and the version
        version: Version number

    Returns:
        The version-qualified key
    """
    return f"{base_key}{separator}{version}"
