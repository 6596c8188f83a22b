"""
Member sync: fetch all active members page by page and upsert their fee data.
"""
import logging

from clubsync.sync_utils import SyncResult
from easyverein.exceptions import RecordError, SyncStepError
from easyverein.services.mapping import map_member
from members.models import Member

logger = logging.getLogger(__name__)


class MemberSync:
    """Mirrors active easyVerein members into the members table."""

    def __init__(self, client, store):
        self.client = client
        self.store = store

    def run(self) -> SyncResult:
        result = SyncResult(source='Members')

        logger.info("Fetching members...")
        try:
            members = self.client.get_members()
        except SyncStepError as e:
            logger.error(f"Error fetching members: {e}")
            result.fail(str(e))
            return result

        result.fetched = len(members)
        logger.info(f"Found {len(members)} members")

        for record in members:
            self._process_member(record, result)

        return result

    def _process_member(self, record, result):
        member_id = record.get('id') if isinstance(record, dict) else None
        try:
            fields = map_member(record)
            exists = self.store.exists(Member, fields['id'])
            self.store.upsert(Member, fields)
        except RecordError as e:
            logger.warning(f"Error processing member {member_id}: {e}")
            result.record_error(f"Member {member_id}: {e}")
            return

        label = f"{record.get('membershipNumber')} ({record.get('emailOrUserName')})"
        if exists:
            result.updated += 1
            logger.info(f"Updated member: {label}")
        else:
            result.created += 1
            logger.info(f"New member: {label}")
