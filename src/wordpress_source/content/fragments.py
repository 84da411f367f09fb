# ABOUTME: Splits rendered post HTML into ordered html and image fragments
# ABOUTME: Each fragment keeps its original markup so joining them restores the body exactly

import re
from typing import TYPE_CHECKING

from wordpress_source.assets.naming import asset_file_name
from wordpress_source.normalize.models import FragmentImage, PostFragment

if TYPE_CHECKING:
    from wordpress_source.assets.downloader import AssetDownloader

IMG_TAG = re.compile(r'<img[^>]*\ssrc="([^"]*)"[^>]*>')
ALT_ATTRIBUTE = re.compile(r'\salt="([^"]*)"')


def _is_remote(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def split_post_fragments(content: str, downloader: "AssetDownloader | None" = None) -> list[PostFragment]:
    """Split ``content`` around its ``<img>`` tags.

    Images become image fragments only when a downloader is given and the
    source is a well-formed http(s) URL; every other tag stays in an html fragment.
    """
    fragments: list[PostFragment] = []
    position = 0

    def add_html(html: str) -> None:
        if html:
            fragments.append(PostFragment(order=len(fragments) + 1, kind="html", html=html))

    for match in IMG_TAG.finditer(content):
        add_html(content[position : match.start()])
        position = match.end()

        tag, url = match.group(0), match.group(1)
        if downloader is None or not _is_remote(url):
            add_html(tag)
            continue

        try:
            file_name = asset_file_name(url)
        except ValueError:
            add_html(tag)
            continue

        alt = ALT_ATTRIBUTE.search(tag)
        src = downloader.schedule(url, file_name)
        fragments.append(
            PostFragment(
                order=len(fragments) + 1,
                kind="image",
                html=tag,
                image=FragmentImage(
                    remote_url=url,
                    file_name=file_name,
                    src=str(src),
                    alt=alt.group(1) if alt else "",
                ),
            )
        )

    add_html(content[position:])
    return fragments
