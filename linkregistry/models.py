from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class LinkRecord:
    link_id: str                        # Short identifier, 1..10 grapheme clusters
    link: str                           # Full http(s) URL the identifier points to
# fmt: on
