# ABOUTME: Value types produced by normalization: references, asset descriptors, post fragments
# ABOUTME: Pydantic models so nodes serialize cleanly for sinks and persistence

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReferenceId = int | str | list[int | str] | None


class Reference(BaseModel):
    """Typed pointer to a node that the sink resolves later."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    id: ReferenceId


class AssetDescriptor(BaseModel):
    """A recognized image whose bytes are (being) stored locally."""

    src: str = Field(..., description="Local path of the downloaded file")
    title: str | None = None
    alt: str | None = None
    remote_url: str = Field(..., description="URL the file is downloaded from")


class FragmentImage(BaseModel):
    remote_url: str
    file_name: str
    src: str
    alt: str = ""


class PostFragment(BaseModel):
    """One ordered segment of a split post body."""

    order: int
    kind: Literal["html", "image"]
    html: str = Field(..., description="Original markup of this segment")
    image: FragmentImage | None = None
