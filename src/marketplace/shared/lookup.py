"""Repository lookups that report missing entities as ``NotFoundError``."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.errors import NotFoundError


def load(aggregate_cls, identifier, field_name=None):
    """Fetch an aggregate by identifier or raise ``NotFoundError``."""
    field_name = field_name or aggregate_cls.__name__
    if not identifier:
        raise NotFoundError({field_name: [f"{aggregate_cls.__name__} identifier is required"]})

    try:
        return current_domain.repository_for(aggregate_cls).get(identifier)
    except ObjectNotFoundError:
        raise NotFoundError({field_name: [f"{aggregate_cls.__name__} {identifier} does not exist"]}) from None
