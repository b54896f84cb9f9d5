"""Find embeddable tags in a document tree and rewrite them in place.

Each resource kind has a fixed policy describing which elements are
eligible and how a successful load rewrites the element:

- script: ``<script src>`` keeps its tag and other attributes, loses ``src``
  and gains the file content as its only child
- stylesheet: ``<link rel href>`` becomes a bare ``<style>`` holding the file
  content, with CSS ``url(...)`` images inlined
- image: ``<img src>`` keeps everything but ``src``, which becomes a data URI

Passes run in that order. Each pass collects its tags first and mutates
them afterwards.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Script, Stylesheet

from ..errors import ExternalResourceNotSupportedError, ResourceNotFoundError
from ..model.options import EmbedOptions
from .css import rewrite_css_urls
from .images import encode_image
from .loader import is_external, is_inline, read_text_resource, resolve_resource

logger = logging.getLogger(__name__)


class ResourceKind(Enum):
    SCRIPT = "script"
    STYLESHEET = "stylesheet"
    IMAGE = "image"


@dataclass(frozen=True, slots=True)
class ResourcePolicy:
    kind: ResourceKind
    tag_name: str
    required_attributes: tuple[str, ...]
    path_attribute: str
    binary: bool = False
    # Rename the element after a successful textual embed
    new_tag_name: str | None = None
    # Discard every attribute of the original element
    drop_attributes: bool = False
    string_class: type[NavigableString] = NavigableString


POLICIES: dict[ResourceKind, ResourcePolicy] = {
    ResourceKind.SCRIPT: ResourcePolicy(
        kind=ResourceKind.SCRIPT,
        tag_name="script",
        required_attributes=("src",),
        path_attribute="src",
        string_class=Script,
    ),
    ResourceKind.STYLESHEET: ResourcePolicy(
        kind=ResourceKind.STYLESHEET,
        tag_name="link",
        required_attributes=("rel", "href"),
        path_attribute="href",
        new_tag_name="style",
        drop_attributes=True,
        string_class=Stylesheet,
    ),
    ResourceKind.IMAGE: ResourcePolicy(
        kind=ResourceKind.IMAGE,
        tag_name="img",
        required_attributes=("src",),
        path_attribute="src",
        binary=True,
    ),
}


@dataclass(slots=True)
class EmbedReport:
    """Per-kind counts of what happened to each eligible tag."""

    embedded: Counter[str] = field(default_factory=Counter)
    missing: Counter[str] = field(default_factory=Counter)
    skipped: Counter[str] = field(default_factory=Counter)

    @property
    def total_embedded(self) -> int:
        return sum(self.embedded.values())

    @property
    def total_missing(self) -> int:
        return sum(self.missing.values())


def is_eligible(tag: Tag, policy: ResourcePolicy) -> bool:
    """Return True if every required attribute is present and non-empty."""

    if tag.name != policy.tag_name:
        return False
    return all(tag.get(attr) for attr in policy.required_attributes)


def find_embeddable(soup: BeautifulSoup, policy: ResourcePolicy) -> list[Tag]:
    """Collect eligible tags for ``policy`` in document order."""

    return [tag for tag in soup.find_all(policy.tag_name) if is_eligible(tag, policy)]


def _set_text_content(tag: Tag, policy: ResourcePolicy, data: str) -> None:
    tag.clear()
    tag.append(policy.string_class(data))


def embed_tag(
    tag: Tag,
    policy: ResourcePolicy,
    base_dir: Path,
    *,
    allow_external: bool = False,
    report: EmbedReport | None = None,
) -> bool:
    """Rewrite one eligible tag in place.

    Returns True when the tag was embedded. Missing local files are logged
    and leave the tag untouched.

    Raises ExternalResourceNotSupportedError when the tag references a remote
    resource and ``allow_external`` is set.
    """

    report = report if report is not None else EmbedReport()
    kind = policy.kind.value
    src = str(tag.get(policy.path_attribute))

    if is_external(src):
        if allow_external:
            logger.debug("Fetching %s %s", kind, src)
            raise ExternalResourceNotSupportedError(src, kind=kind)
        report.skipped[kind] += 1
        return False

    if is_inline(src):
        report.skipped[kind] += 1
        return False

    logger.debug("Fetching %s %s", kind, src)
    try:
        if policy.binary:
            path = resolve_resource(base_dir, src, kind=kind)
        else:
            path, data = read_text_resource(base_dir, src, kind=kind)
    except ResourceNotFoundError as exc:
        logger.warning("%s", exc)
        report.missing[kind] += 1
        return False

    if policy.binary:
        tag[policy.path_attribute] = encode_image(path)
    else:
        if policy.kind is ResourceKind.STYLESHEET:
            data = rewrite_css_urls(data, path.parent)

        if policy.drop_attributes:
            tag.attrs = {}
        else:
            del tag[policy.path_attribute]

        if policy.new_tag_name:
            tag.name = policy.new_tag_name

        _set_text_content(tag, policy, data)

    report.embedded[kind] += 1
    return True


def embed_resources(soup: BeautifulSoup, base_dir: Path, options: EmbedOptions) -> EmbedReport:
    """Embed scripts, stylesheets and (optionally) images into ``soup``.

    Relative references resolve against ``base_dir``.
    """

    logger.debug("Embedding resources...")
    kinds = [ResourceKind.SCRIPT, ResourceKind.STYLESHEET]
    if options.images:
        kinds.append(ResourceKind.IMAGE)

    report = EmbedReport()
    for kind in kinds:
        policy = POLICIES[kind]
        for tag in find_embeddable(soup, policy):
            embed_tag(
                tag,
                policy,
                base_dir,
                allow_external=options.external,
                report=report,
            )

    return report


__all__ = [
    "POLICIES",
    "EmbedReport",
    "ResourceKind",
    "ResourcePolicy",
    "embed_resources",
    "embed_tag",
    "find_embeddable",
    "is_eligible",
]
