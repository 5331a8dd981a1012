"""
View catalog record models.

This module defines the ViewKind enum and the ViewRecord class, which
describe the analytic, attribute and calculation views read from the
repository catalog.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ViewKind(str, Enum):
    """Kinds of information views, keyed by their catalog object suffix.

    Example:
        >>> ViewKind("calculationview") is ViewKind.CALCULATION
        True
        >>> ViewKind.values()
        ['analyticview', 'attributeview', 'calculationview']
    """

    ANALYTIC = "analyticview"
    ATTRIBUTE = "attributeview"
    CALCULATION = "calculationview"

    @classmethod
    def values(cls) -> list[str]:
        """Return the object suffixes of all supported view kinds."""
        return [member.value for member in cls]

    @classmethod
    def from_suffix(cls, suffix: str) -> Optional["ViewKind"]:
        """Return the ViewKind for an object suffix, or None if unsupported."""
        try:
            return cls(suffix)
        except ValueError:
            return None


SUPPORTED_SUFFIXES: Tuple[str, ...] = tuple(ViewKind.values())


@dataclass(frozen=True)
class ViewRecord:
    """A view definition stored in the catalog.

    Identity is the (package_id, object_name, object_suffix) tuple; the XML
    body does not take part in equality or hashing, so the same view read
    through two different catalog relations compares equal.

    Attributes:
        package_id: Repository package, e.g. "acme.sales".
        object_name: View name inside the package.
        object_suffix: Catalog object suffix, e.g. "calculationview".
        cdata: Raw XML definition of the view.

    Example:
        >>> view = ViewRecord("acme.sales", "CV_ORDERS", "calculationview")
        >>> view.view_id
        'acme.sales/CV_ORDERS'
    """

    package_id: str
    object_name: str
    object_suffix: str
    cdata: str = field(default="", compare=False, repr=False)

    @property
    def view_id(self) -> str:
        """Identifier used in lineage output: ``package/object``."""
        return f"{self.package_id}/{self.object_name}"

    @property
    def identity(self) -> Tuple[str, str, str]:
        return (self.package_id, self.object_name, self.object_suffix)

    @property
    def kind(self) -> Optional[ViewKind]:
        return ViewKind.from_suffix(self.object_suffix)

    @property
    def is_supported(self) -> bool:
        return self.kind is not None

    def __str__(self) -> str:
        return f"{self.view_id} ({self.object_suffix})"
