"""
Host page document and declarative render maps.

A Page wraps the parsed host HTML. Widgets address elements by id only; an id that
is not in the document is skipped, never an error. Render maps describe which record
field lands in which element and can be resolved without a document.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

TEXT = "text"
HTML = "html"
HREF = "href"

ElementRef = Union[str, Tag]


@dataclass(frozen=True)
class FieldBinding:
    """Maps one record field (or a function of the record) to one element id"""
    element_id: str
    field: Union[str, Callable[[Any], Any]]
    transform: Optional[Callable[[Any], Any]] = None
    target: str = HTML


def _get_field(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def resolve_render_map(bindings: Iterable[FieldBinding], record: Any) -> Dict[str, Tuple[str, str]]:
    """Resolve bindings against a record into {element_id: (target, value)}.

    Bindings whose field is missing or None are left out so the element keeps
    whatever it showed before.
    """
    resolved = {}
    for binding in bindings:
        if callable(binding.field):
            value = binding.field(record)
        else:
            value = _get_field(record, binding.field)
        if value is None:
            logger.debug(f"No value for {binding.element_id}, skipping")
            continue
        if binding.transform:
            value = binding.transform(value)
        resolved[binding.element_id] = (binding.target, str(value))
    return resolved


class Page:
    def __init__(self, html: str, url: str = "/"):
        self.soup = BeautifulSoup(html, "html.parser")
        self.url = url
        self.path = urlparse(url).path or "/"

    def url_endswith(self, suffix: str) -> bool:
        return self.url.endswith(suffix)

    def element(self, ref: ElementRef) -> Optional[Tag]:
        """Return the element for an id (or pass a Tag through); None when absent"""
        if isinstance(ref, Tag):
            return ref
        el = self.soup.find(id=ref)
        if el is None:
            logger.debug(f"Element #{ref} not found in {self.url}")
        return el

    def has_elements(self, *element_ids: str) -> bool:
        return all(self.soup.find(id=element_id) is not None for element_id in element_ids)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def set_text(self, ref: ElementRef, text: str) -> bool:
        el = self.element(ref)
        if el is None:
            return False
        el.string = text
        return True

    def set_html(self, ref: ElementRef, html: str) -> bool:
        el = self.element(ref)
        if el is None:
            return False
        el.clear()
        for node in self.fragment(html):
            el.append(node)
        return True

    def set_attr(self, ref: ElementRef, name: str, value: str) -> bool:
        el = self.element(ref)
        if el is None:
            return False
        el[name] = value
        return True

    def add_class(self, ref: ElementRef, *classes: str) -> bool:
        el = self.element(ref)
        if el is None:
            return False
        current = list(el.get("class") or [])
        for cls in classes:
            if cls not in current:
                current.append(cls)
        el["class"] = current
        return True

    def remove_class(self, ref: ElementRef, *classes: str) -> bool:
        el = self.element(ref)
        if el is None:
            return False
        remaining = [cls for cls in (el.get("class") or []) if cls not in classes]
        if remaining:
            el["class"] = remaining
        elif el.has_attr("class"):
            del el["class"]
        return True

    def set_style(self, ref: ElementRef, style: str) -> bool:
        """Set the inline style; an empty string removes it"""
        el = self.element(ref)
        if el is None:
            return False
        if style:
            el["style"] = style
        elif el.has_attr("style"):
            del el["style"]
        return True

    def new_tag(self, name: str, classes: Optional[List[str]] = None, text: Optional[str] = None,
                **attrs: str) -> Tag:
        tag = self.soup.new_tag(name, attrs=attrs)
        if classes:
            tag["class"] = list(classes)
        if text is not None:
            tag.string = text
        return tag

    def fragment(self, html: str) -> List[Any]:
        """Parse an HTML snippet into detached nodes ready to append"""
        return [node.extract() for node in list(BeautifulSoup(html, "html.parser").contents)]

    def apply(self, values: Dict[str, Tuple[str, str]]) -> int:
        """Write resolved render-map values; returns how many elements were updated"""
        updated = 0
        for element_id, (target, value) in values.items():
            if target == TEXT:
                ok = self.set_text(element_id, value)
            elif target == HTML:
                ok = self.set_html(element_id, value)
            else:
                ok = self.set_attr(element_id, target, value)
            if ok:
                updated += 1
        return updated

    def apply_render_map(self, bindings: Iterable[FieldBinding], record: Any) -> int:
        return self.apply(resolve_render_map(bindings, record))

    def html(self) -> str:
        return str(self.soup)
