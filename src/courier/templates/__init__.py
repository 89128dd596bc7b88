"""Template registry — maps event identifiers to notification templates.

Role catalogs are merged into one lookup table in the order customer,
vendor, driver, admin. When two roles declare the same event the later
role wins; a role-qualified lookup reads the role's own template instead.
"""

from types import MappingProxyType

from courier.errors import TemplateNotFoundError
from courier.templates.admin import ADMIN_TEMPLATES
from courier.templates.customer import CUSTOMER_TEMPLATES
from courier.templates.driver import DRIVER_TEMPLATES
from courier.templates.template import NotificationTemplate
from courier.templates.vendor import VENDOR_TEMPLATES


class TemplateRegistry:
    """Read-only lookup over one or more role catalogs."""

    def __init__(self, *catalogs):
        merged: dict[str, NotificationTemplate] = {}
        by_role: dict[tuple[str, str], NotificationTemplate] = {}
        by_id: dict[str, NotificationTemplate] = {}

        for catalog in catalogs:
            for event, template in catalog.items():
                merged[event] = template
                by_role[(template.role, event)] = template
                by_id[template.id] = template

        self._templates = MappingProxyType(merged)
        self._by_role = MappingProxyType(by_role)
        self._by_id = MappingProxyType(by_id)

    @property
    def templates(self):
        """The merged event → template mapping."""
        return self._templates

    def all(self):
        """Every registered template, including ones shadowed by the merge."""
        return list(self._by_id.values())

    def get_template(self, event: str, role: str | None = None) -> NotificationTemplate | None:
        """Active template for ``event``, optionally scoped to ``role``."""
        if role:
            template = self._by_role.get((role, event))
        else:
            template = self._templates.get(event)
        if template is None or not template.is_active:
            return None
        return template

    def get_by_id(self, template_id: str) -> NotificationTemplate | None:
        template = self._by_id.get(template_id)
        if template is None or not template.is_active:
            return None
        return template

    def require(self, event: str, role: str | None = None, template_id: str | None = None) -> NotificationTemplate:
        """Resolve a template or raise ``TemplateNotFoundError``.

        An explicit ``template_id`` wins over the event lookup.
        """
        if template_id:
            template = self.get_by_id(template_id)
            if template is None:
                raise TemplateNotFoundError(template_id, role)
            return template

        template = self.get_template(event, role)
        if template is None:
            raise TemplateNotFoundError(event, role)
        return template

    def __contains__(self, event):
        return self.get_template(event) is not None

    def __len__(self):
        return len(self._templates)


TEMPLATE_REGISTRY = TemplateRegistry(
    CUSTOMER_TEMPLATES,
    VENDOR_TEMPLATES,
    DRIVER_TEMPLATES,
    ADMIN_TEMPLATES,
)


def get_template(event: str, role: str | None = None) -> NotificationTemplate | None:
    """Look up an active template in the default registry."""
    return TEMPLATE_REGISTRY.get_template(event, role)
