"""Location registration — command, handler and the sample directory."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from shipping.domain import shipping
from shipping.location.location import Location

logger = structlog.get_logger(__name__)

SAMPLE_LOCATIONS = {
    "SESTO": "Stockholm",
    "AUMEL": "Melbourne",
    "CNHKG": "Hongkong",
    "USNYC": "New York",
    "USCHI": "Chicago",
    "JNTKO": "Tokyo",
    "DEHAM": "Hamburg",
    "NLRTM": "Rotterdam",
    "FIHEL": "Helsinki",
}


@shipping.command(part_of="Location")
class RegisterLocation:
    un_locode = String(required=True, max_length=5)
    name = String(required=True, max_length=100)


@shipping.command_handler(part_of=Location)
class RegisterLocationHandler:
    @handle(RegisterLocation)
    def register_location(self, command):
        repo = current_domain.repository_for(Location)
        try:
            location = repo.get(command.un_locode)
            location.name = command.name
        except ObjectNotFoundError:
            location = Location(un_locode=command.un_locode, name=command.name)
        repo.add(location)
        return location.un_locode


def seed_sample_locations() -> None:
    """Register the sample locations. Safe to call more than once."""
    for un_locode, name in SAMPLE_LOCATIONS.items():
        current_domain.process(RegisterLocation(un_locode=un_locode, name=name), asynchronous=False)
    logger.debug("Sample locations seeded", count=len(SAMPLE_LOCATIONS))
