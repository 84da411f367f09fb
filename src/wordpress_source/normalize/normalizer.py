# ABOUTME: Recursive rewrite of raw WordPress records into canonical node fields
# ABOUTME: Dispatches on the classified value kind; images are handed to the asset downloader

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from wordpress_source.assets.naming import asset_file_name
from wordpress_source.normalize.casing import TypeNamer, camel_case
from wordpress_source.normalize.classify import ValueKind, classify_value, entity_id
from wordpress_source.normalize.models import AssetDescriptor, Reference
from wordpress_source.utils.logging import get_logger

if TYPE_CHECKING:
    from wordpress_source.assets.downloader import AssetDownloader

LINK_MARKER = "_"
SPECIAL_GROUP_KEY = "acf"
TYPE_ATTACHMENT = "attachment"

ReferenceFactory = Callable[[str, Any], Reference]


def _default_reference(type_name: str, id: Any) -> Reference:
    return Reference(type_name=type_name, id=id)


class FieldNormalizer:
    """Turns one raw record into a normalized node.

    Without a downloader the rewrite is a pure function of its input. With one,
    image sites inside the ``acf`` group get deterministic local paths and the
    downloads are scheduled, not awaited.
    """

    def __init__(
        self,
        type_namer: TypeNamer,
        reference_factory: ReferenceFactory | None = None,
        downloader: "AssetDownloader | None" = None,
    ):
        self.type_namer = type_namer
        self.reference_factory = reference_factory or _default_reference
        self.downloader = downloader
        self.logger = get_logger(__name__)

    def normalize(self, record: dict[str, Any], in_special_group: bool = False) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for key, value in record.items():
            key = str(key)
            if key.startswith(LINK_MARKER):
                continue
            fields[camel_case(key)] = self.normalize_value(value, in_special_group or key == SPECIAL_GROUP_KEY)
        return fields

    def normalize_value(self, value: Any, in_special_group: bool = False) -> Any:
        images_enabled = in_special_group and self.downloader is not None
        kind = classify_value(value, images_enabled)

        if kind == ValueKind.NULL:
            return None
        if kind == ValueKind.SEQUENCE:
            return [self.normalize_value(item, in_special_group) for item in value]
        if kind == ValueKind.EMBEDDED_IMAGE:
            return self._embedded_image(value)
        if kind == ValueKind.FOREIGN_ENTITY:
            return self.reference_factory(self.type_namer(value["post_type"]), entity_id(value))
        if kind == ValueKind.ATTACHMENT:
            return self.reference_factory(self.type_namer(TYPE_ATTACHMENT), entity_id(value))
        if kind == ValueKind.RICH_TEXT:
            return value["rendered"]
        if kind == ValueKind.MAPPING:
            return self.normalize(value, in_special_group)
        if kind == ValueKind.IMAGE_URL:
            return self._image_url(value)
        return value

    def _embedded_image(self, value: dict[str, Any]) -> Any:
        try:
            file_name = asset_file_name(value["filename"])
        except ValueError:
            self.logger.warning("Unusable image file name, keeping field as is", filename=value["filename"])
            return self.normalize(value)

        path = self.downloader.schedule(value["url"], file_name)  # type: ignore[union-attr]
        return AssetDescriptor(
            src=str(path),
            title=value.get("title"),
            alt=value.get("description"),
            remote_url=value["url"],
        )

    def _image_url(self, url: str) -> str:
        try:
            file_name = asset_file_name(url)
        except ValueError:
            self.logger.warning("Malformed image URL, keeping original value", url=url)
            return url

        path = self.downloader.schedule(url, file_name)  # type: ignore[union-attr]
        self.logger.debug("Scheduled field image", url=url, path=str(path))
        return str(path)
