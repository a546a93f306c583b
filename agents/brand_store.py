import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from models.domain import DEFAULT_DIALECT, Brand, BrandIdentity, Dialect, Post
from utils.file_manager import StoragePort
from utils.logger import AgentLogger


STORAGE_KEY = "socialpost_ai_brands"

_DIALECT_VALUES = {d.value for d in Dialect}

# Accept both python field names and persisted camelCase keys in partial updates
_POST_FIELD_KEYS: Dict[str, str] = {}
for _name, _field in Post.model_fields.items():
    _POST_FIELD_KEYS[_name] = _name
    if _field.alias:
        _POST_FIELD_KEYS[_field.alias] = _name


class BrandStore:
    """
    In-memory brand collection mirrored to a key/value storage port.

    Every mutation builds a new tuple of brands (and new Brand/Post objects
    for whatever changed) and then persists the whole collection. Snapshots
    handed out earlier are never modified.
    """

    def __init__(self, storage: StoragePort, storage_key: str = STORAGE_KEY,
                 default_dialect: Dialect = DEFAULT_DIALECT):
        self.storage = storage
        self.storage_key = storage_key
        self.default_dialect = Dialect(default_dialect)
        self.logger = AgentLogger("brand_store")
        self._brands: Tuple[Brand, ...] = ()
        self._loaded = False

    @property
    def brands(self) -> Tuple[Brand, ...]:
        return self._brands

    def load(self) -> Tuple[Brand, ...]:
        """Hydrate from storage, filling defaults for fields older records lack.

        Any read or parse failure is logged and leaves the collection empty.
        A post that fails validation is dropped on its own; its brand is kept.
        """
        self._brands = ()
        self._loaded = True

        try:
            raw = self.storage.get_item(self.storage_key)
        except Exception as e:
            self.logger.log_error("brands_load_failed", str(e), {"storage_key": self.storage_key})
            return self._brands

        if raw is None:
            return self._brands

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            self.logger.log_error("brands_load_failed", f"Unparsable payload: {e}",
                                  {"storage_key": self.storage_key})
            return self._brands

        if not isinstance(records, list):
            self.logger.log_error("brands_load_failed", "Payload is not a list",
                                  {"storage_key": self.storage_key})
            return self._brands

        brands = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                self.logger.log_error("brand_record_skipped", "Record is not an object", {"index": index})
                continue
            migrated = self._migrate(record)
            migrated["posts"] = self._load_posts(migrated["posts"], record.get("id"))
            try:
                brands.append(Brand.model_validate(migrated))
            except ValidationError as e:
                self.logger.log_error("brand_record_skipped", str(e),
                                      {"index": index, "brand_id": record.get("id")})

        self._brands = tuple(brands)
        self.logger.log_info("Brands loaded", {"brand_count": len(self._brands)})
        return self._brands

    def _migrate(self, record: Dict[str, Any]) -> Dict[str, Any]:
        dialect = record.get("dialect")
        posts = record.get("posts")
        return {
            **record,
            "dialect": dialect if dialect in _DIALECT_VALUES else self.default_dialect.value,
            "posts": posts if isinstance(posts, list) else [],
            "identity": record.get("identity") or {},
        }

    def _load_posts(self, records: List[Any], brand_id: Optional[str]) -> List[Post]:
        posts = []
        for index, record in enumerate(records):
            try:
                posts.append(Post.model_validate(record))
            except ValidationError as e:
                self.logger.log_error("post_record_skipped", str(e), {
                    "brand_id": brand_id,
                    "index": index,
                    "post_id": record.get("id") if isinstance(record, dict) else None,
                })
        return posts

    def save(self) -> bool:
        """Persist the full collection. Returns False if the write failed.

        Refuses to write before `load()` has run, so an unloaded store never
        replaces the persisted collection.
        """
        if not self._loaded:
            self.logger.log_warning("save skipped: store not loaded", {"storage_key": self.storage_key})
            return False
        try:
            payload = json.dumps([brand.to_record() for brand in self._brands], ensure_ascii=False)
            self.storage.set_item(self.storage_key, payload)
            return True
        except Exception as e:
            self.logger.log_error("brands_save_failed", str(e), {"brand_count": len(self._brands)})
            return False

    def _commit(self, brands: Iterable[Brand]) -> None:
        self._brands = tuple(brands)
        self.save()

    def get_brand(self, brand_id: str) -> Optional[Brand]:
        return next((b for b in self._brands if b.id == brand_id), None)

    def get_post(self, brand_id: str, post_id: str) -> Optional[Post]:
        brand = self.get_brand(brand_id)
        if brand is None:
            return None
        return next((p for p in brand.posts if p.id == post_id), None)

    def add_brand(self, name: str, description: str,
                  dialect: Optional[Dialect] = None) -> Optional[Brand]:
        """Create a brand with an empty identity and no posts.

        Returns None without touching the collection when the trimmed name or
        description is empty.
        """
        name = (name or "").strip()
        description = (description or "").strip()
        if not name or not description:
            self.logger.log_warning("Brand rejected: name and description are required")
            return None

        brand = Brand(
            name=name,
            description=description,
            dialect=Dialect(dialect) if dialect else self.default_dialect,
            identity=BrandIdentity(),
            posts=[],
        )
        self._commit(self._brands + (brand,))
        self.logger.log_info("Brand added", {"brand_id": brand.id, "dialect": brand.dialect.value})
        return brand

    def delete_brand(self, brand_id: str) -> bool:
        remaining = tuple(b for b in self._brands if b.id != brand_id)
        if len(remaining) == len(self._brands):
            return False
        self._commit(remaining)
        self.logger.log_info("Brand deleted", {"brand_id": brand_id})
        return True

    def append_posts(self, brand_id: str, posts: Iterable[Post]) -> Optional[Brand]:
        """Prepend `posts` (kept in the given order) to the brand's history."""
        new_posts = list(posts)
        updated = None
        brands = []
        for brand in self._brands:
            if brand.id == brand_id:
                brand = brand.model_copy(update={"posts": new_posts + list(brand.posts)})
                updated = brand
            brands.append(brand)

        if updated is None:
            self.logger.log_warning("append_posts: brand not found", {"brand_id": brand_id})
            return None

        self._commit(brands)
        self.logger.log_info("Posts appended", {"brand_id": brand_id, "added": len(new_posts),
                                                "total": len(updated.posts)})
        return updated

    def update_post(self, brand_id: str, post_id: str,
                    updates: Mapping[str, Any]) -> Optional[Post]:
        """Merge `updates` into one post. No-op if brand or post is missing."""
        changes = {}
        for key, value in updates.items():
            field_name = _POST_FIELD_KEYS.get(key)
            if field_name is None or field_name == "id":
                self.logger.log_warning("update_post: ignoring field", {"field": key})
                continue
            changes[field_name] = value

        brand = self.get_brand(brand_id)
        if brand is None:
            return None
        target = next((p for p in brand.posts if p.id == post_id), None)
        if target is None:
            return None

        updated_post = Post.model_validate({**target.model_dump(), **changes})
        updated_brand = brand.model_copy(update={
            "posts": [updated_post if p.id == post_id else p for p in brand.posts]
        })
        self._commit(updated_brand if b.id == brand_id else b for b in self._brands)
        self.logger.log_info("Post updated", {"brand_id": brand_id, "post_id": post_id,
                                              "fields": sorted(changes)})
        return updated_post

    def save_identity(self, brand_id: str,
                      identity: Union[BrandIdentity, Mapping[str, Any]]) -> Optional[Brand]:
        """Replace the brand's identity profile wholesale."""
        if not isinstance(identity, BrandIdentity):
            identity = BrandIdentity.model_validate(identity)

        brand = self.get_brand(brand_id)
        if brand is None:
            return None

        updated = brand.model_copy(update={"identity": identity})
        self._commit(updated if b.id == brand_id else b for b in self._brands)
        self.logger.log_info("Brand identity saved", {"brand_id": brand_id})
        return updated
