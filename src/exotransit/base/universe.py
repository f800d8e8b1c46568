import logging

from tqdm import tqdm

from exotransit.base.system import System
from exotransit.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Universe:
    """
    Keeps track of the planetary systems that made it through ingestion.
    """

    def __init__(self, systems=None, rejected=None) -> None:
        self.type = "Ingested"
        self.systems = systems if systems is not None else []
        # (record index, ConfigurationError) for whole systems that failed
        self.rejected = rejected if rejected is not None else []

    def __repr__(self):
        str = f"{self.type} universe\n"
        str += f"{len(self.systems)} systems loaded"
        return str

    @classmethod
    def from_records(cls, records):
        """
        Ingest a batch of system records, rejecting bad ones individually
        Args:
            records (iterable of dict):
                System records as accepted by ``System.from_record``
        Returns:
            Universe
        """
        systems = []
        rejected = []
        for i, record in enumerate(
            tqdm(records, desc="Ingesting systems", position=0, leave=False, delay=0.5)
        ):
            try:
                systems.append(System.from_record(record))
            except ConfigurationError as err:
                logger.warning("Rejected system record %d: %s", i, err)
                rejected.append((i, err))
        return cls(systems=systems, rejected=rejected)
