"""Split a container image reference into base image and tag."""


def split_image(ref: str) -> tuple[str, str]:
    """Return (image, tag) for a reference like ``host:443/path/name:1.2``.

    The last colon separates the tag unless a slash follows it, in which
    case the colon belongs to a registry port and there is no tag.
    """
    idx = ref.rfind(":")
    if idx == -1 or "/" in ref[idx + 1:]:
        return ref, ""
    return ref[:idx], ref[idx + 1:]
