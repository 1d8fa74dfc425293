"""Cloudinary delivery URLs for stored media."""

from ._config import resolve_cloud_name

DEFAULT_TRANSFORMS = "w_400,h_300,c_fill,f_auto,q_auto"

CLOUDINARY_TRANSFORMS = {
    "thumbnail": "w_150,h_150,c_fill,f_auto,q_auto",
    "card": DEFAULT_TRANSFORMS,
    "hero": "w_800,h_500,c_fill,f_auto,q_auto",
    "full": "w_1200,h_800,c_limit,f_auto,q_auto",
}


def build_cloudinary_url(
    image: str | None, transformations: str | None = None, cloud_name: str | None = None
) -> str:
    """
    Build a delivery URL for a Cloudinary public id.

    Values that are already URLs are returned unchanged, so feeding the
    result back in is a no-op.

    Args:
        image: Public id (e.g. ``projects/shot``) or an absolute URL
        transformations: Transformation string or a ``CLOUDINARY_TRANSFORMS`` key
        cloud_name: Cloud name (default from FOLIO_CLOUDINARY_CLOUD_NAME)

    Returns:
        URL, or ``""`` for an empty input
    """
    if not image:
        return ""
    if image.startswith("http"):
        return image

    transforms = CLOUDINARY_TRANSFORMS.get(transformations or "", transformations)
    base_url = f"https://res.cloudinary.com/{resolve_cloud_name(cloud_name)}/image/upload"
    return f"{base_url}/{transforms or DEFAULT_TRANSFORMS}/{image}"
