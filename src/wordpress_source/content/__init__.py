from .fragments import split_post_fragments

__all__ = ["split_post_fragments"]
