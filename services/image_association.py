# services/image_association.py
"""
Rules for attaching stored image URLs to entities. Pure functions, no I/O: callers
persist the result and delete `removed` URLs after their commit succeeds.

Car images keep exactly one main image whenever the collection is non-empty:
  * an explicit `main_image` URL wins;
  * otherwise a main image that survives the change stays main (appending never moves it);
  * otherwise the image at position 0 becomes main.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from utils.errors import InvariantViolationError, NotFoundError, ValidationError


@dataclass
class StoredImage:
    url: str
    is_main: bool = False


@dataclass
class Reconciliation:
    images: List[StoredImage]
    removed: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)


def assert_single_main(images: Sequence[StoredImage]) -> None:
    mains = sum(1 for img in images if img.is_main)
    if images and mains != 1:
        raise InvariantViolationError()
    if not images and mains:
        raise InvariantViolationError()


def _assign_main(images: List[StoredImage], main_image: Optional[str], keep_url: Optional[str]) -> None:
    if not images:
        return
    urls = [img.url for img in images]
    if main_image:
        if main_image not in urls:
            raise ValidationError("mainImageNotFound", url=main_image)
        target = main_image
    elif keep_url in urls:
        target = keep_url
    else:
        target = urls[0]
    for img in images:
        img.is_main = img.url == target


def reconcile_car_images(
    existing: Sequence[StoredImage],
    new_urls: Sequence[str],
    replace: bool = False,
    main_image: Optional[str] = None,
) -> Reconciliation:
    """
    Merge freshly stored `new_urls` into a car's `existing` images.

    replace=True drops every existing image (reported in `removed`); otherwise new
    images are appended in upload order. With no new URLs the collection is kept and
    only `main_image` can change.
    """
    current = [StoredImage(img.url, img.is_main) for img in existing]
    previous_main = next((img.url for img in current if img.is_main), None)

    if new_urls and replace:
        images = [StoredImage(url) for url in new_urls]
        removed = [img.url for img in current]
    else:
        images = current + [StoredImage(url) for url in new_urls]
        removed = []

    _assign_main(images, main_image, previous_main)
    assert_single_main(images)
    return Reconciliation(images=images, removed=removed, added=list(new_urls))


def remove_car_image(existing: Sequence[StoredImage], url: str) -> Reconciliation:
    if url not in [img.url for img in existing]:
        raise NotFoundError("imageNotFound", url=url)
    images = [StoredImage(img.url, img.is_main) for img in existing if img.url != url]
    previous_main = next((img.url for img in images if img.is_main), None)
    _assign_main(images, None, previous_main)
    assert_single_main(images)
    return Reconciliation(images=images, removed=[url])


def replace_single(current: Optional[str], new_url: Optional[str]) -> Tuple[Optional[str], List[str]]:
    """Single `image` field: a new upload supersedes the old URL."""
    if not new_url:
        return current, []
    return new_url, ([current] if current and current != new_url else [])


def replace_slots(
    current: Mapping[str, Optional[str]],
    new_urls: Mapping[str, str],
) -> Tuple[Dict[str, Optional[str]], List[str]]:
    """Named singleton slots: each uploaded slot supersedes only its own previous URL."""
    updated = dict(current)
    removed = []
    for slot, url in new_urls.items():
        old = updated.get(slot)
        if old and old != url:
            removed.append(old)
        updated[slot] = url
    return updated, removed
