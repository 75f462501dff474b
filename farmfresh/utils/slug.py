# farmfresh/utils/slug.py
import re
import unicodedata

from sqlalchemy.orm import Session

_NON_WORD = re.compile(r"[^a-z0-9]+")

def slugify(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD.sub("-", normalized.lower()).strip("-")
    return slug or "item"

def unique_slug(db: Session, model, value: str, exclude_id: int = None) -> str:
    """Slugify value and append -2, -3, ... until no other row of model uses it."""
    base = slugify(value)
    candidate, n = base, 1
    while True:
        q = db.query(model.id).filter(model.slug == candidate)
        if exclude_id is not None:
            q = q.filter(model.id != exclude_id)
        if q.first() is None:
            return candidate
        n += 1
        candidate = f"{base}-{n}"
