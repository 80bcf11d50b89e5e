from collections.abc import Iterable, Sequence

from agenda.domain.entities import ROLES, Band, Event, User
from agenda.rules.models import AccessRules, Rules


class PolicyEngine:
    """
    Role-based visibility for bands, events and financial/contract fields.

    Never raises. A missing user sees nothing; an unrecognized role is
    evaluated as the fallback role (VIEWER) so access fails closed.
    """

    def __init__(self, rules: Rules):
        self.rules = rules

    @property
    def access(self) -> AccessRules:
        return self.rules.access

    def effective_role(self, user: User | None) -> str | None:
        if user is None:
            return None
        role = (user.role or "").upper()
        if role not in ROLES:
            return self.access.fallback_role
        return role

    def _has_role(self, user: User | None, allowed: Iterable[str]) -> bool:
        role = self.effective_role(user)
        return role is not None and role in allowed

    # --- Partition filters ---

    def sees_all_bands(self, user: User | None) -> bool:
        return self._has_role(user, self.access.all_bands_roles)

    def sees_all_events(self, user: User | None) -> bool:
        return self._has_role(user, self.access.all_events_roles)

    def filter_bands(self, bands: Sequence[Band], user: User | None) -> list[Band]:
        if user is None:
            return []
        if self.sees_all_bands(user):
            return list(bands)
        allowed = set(user.band_ids)
        return [b for b in bands if b.id in allowed]

    def accessible_band_ids(self, user: User | None, bands: Sequence[Band] | None = None) -> set[str] | None:
        """
        Band ids the user may reach; None means unrestricted.

        When the band roster is supplied, roles that see every band are
        limited to bands that actually exist.
        """
        if user is None:
            return set()
        if self.sees_all_bands(user):
            if bands is None:
                return None
            return {b.id for b in bands}
        return set(user.band_ids)

    def filter_events(
        self,
        events: Sequence[Event],
        user: User | None,
        bands: Sequence[Band] | None = None,
    ) -> list[Event]:
        if user is None:
            return []
        if self.sees_all_events(user):
            return list(events)
        allowed = self.accessible_band_ids(user, bands)
        if allowed is None:
            return list(events)
        return [e for e in events if e.band_id in allowed]

    def can_access_event(self, user: User | None, event: Event, bands: Sequence[Band] | None = None) -> bool:
        return bool(self.filter_events([event], user, bands))

    # --- Capability flags ---

    def can_see_financials(self, user: User | None) -> bool:
        return self._has_role(user, self.access.financials_roles)

    def can_edit_contracts(self, user: User | None) -> bool:
        return self._has_role(user, self.access.contracts_roles)

    def can_manage_users(self, user: User | None) -> bool:
        return self._has_role(user, self.access.admin_roles)

    def can_manage_bands(self, user: User | None) -> bool:
        return self._has_role(user, self.access.admin_roles)

    def can_edit_events(self, user: User | None) -> bool:
        return self._has_role(user, self.access.event_edit_roles)

    def can_delete_events(self, user: User | None) -> bool:
        return self._has_role(user, self.access.event_delete_roles)

    def can_issue_prospecting_links(self, user: User | None) -> bool:
        return self._has_role(user, self.access.prospecting_roles)
