# Mortuary — Database Models
# Import all models here for SQLAlchemy discovery

from mortuary.models.staff_user import StaffUser            # noqa
from mortuary.models.chamber import Chamber                  # noqa
from mortuary.models.deceased import DeceasedRecord          # noqa
from mortuary.models.next_of_kin import NextOfKin            # noqa
from mortuary.models.service import Service                  # noqa
from mortuary.models.release_record import ReleaseRecord     # noqa
