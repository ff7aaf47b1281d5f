"""Location aggregate — a port or terminal identified by its UN/LOCODE."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Identifier, String

from shipping.domain import shipping


@shipping.aggregate
class Location:
    un_locode = Identifier(identifier=True, required=True)
    name = String(required=True, max_length=100)

    @invariant.post
    def un_locode_must_be_valid(self):
        # Two-letter country code followed by three alphanumerics, e.g. SESTO
        if not re.match(r"^[A-Z]{2}[A-Z2-9]{3}$", str(self.un_locode)):
            raise ValidationError({"un_locode": [f"'{self.un_locode}' is not a valid UN/LOCODE"]})
