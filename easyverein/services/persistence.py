"""
Idempotent writes of mapped records.

Each upsert runs in its own transaction keyed by the remote id, so re-syncing
a record updates its row instead of adding a second one.
"""
import logging
from typing import Dict, Tuple, Type

from django.db import DatabaseError, models, transaction

from easyverein.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class UpsertStore:
    """Writes mapped records to their tables, one transaction per record."""

    def __init__(self, using: str = 'default'):
        self.using = using

    def upsert(self, model: Type[models.Model], fields: Dict) -> Tuple[models.Model, bool]:
        """
        Insert or update the row whose primary key is fields['id'].

        The transaction is rolled back on any database error, which is
        re-raised as PersistenceError.

        Returns:
            (instance, created)
        """
        values = dict(fields)
        pk = values.pop('id')
        table = model._meta.db_table
        try:
            with transaction.atomic(using=self.using):
                instance, created = model.objects.using(self.using).update_or_create(
                    pk=pk, defaults=values
                )
        except (DatabaseError, TypeError, ValueError) as e:
            logger.debug(f"Rolled back upsert of {table} {pk}: {e}")
            raise PersistenceError(f"Failed to save {table} {pk}: {e}") from e
        return instance, created

    def exists(self, model: Type[models.Model], pk) -> bool:
        """Whether a row with this primary key is already stored."""
        return model.objects.using(self.using).filter(pk=pk).exists()
