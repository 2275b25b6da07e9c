"""Domain initialization and configuration.

Event Planning Marketplace bounded context: organizers publish event types and
bookable packages, requesters submit event requests against packages, and the
organizer drives each request through its status lifecycle. Feedback on a
completed request feeds the organizer's running rating.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
