"""User profile and nutrition target state."""

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from diet_planner.domain.nutrition import Nutrition
from diet_planner.domain.profile import UserProfile
from diet_planner.services.macros import MacroValidation, validate_macros
from diet_planner.services.plans import PlanStore
from diet_planner.services.storage import USER_PROFILE_KEY, SafeStorage
from diet_planner.services.targets import InvalidProfileError, compute_targets

_logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    """Owns the user profile and the targets derived from it."""

    storage: SafeStorage
    plan_store: PlanStore
    profile: UserProfile | None = field(default=None, init=False)
    targets: Nutrition | None = field(default=None, init=False)

    async def load(self) -> UserProfile | None:
        """Restore the stored profile and recompute its targets."""
        payload = await self.storage.get_json(USER_PROFILE_KEY)
        if payload is None:
            _logger.info("No stored user profile")
            return None
        try:
            profile = UserProfile.model_validate(payload)
            targets = compute_targets(profile)
        except (ValidationError, InvalidProfileError):
            _logger.exception("Stored user profile is unusable")
            return None
        self.profile = profile
        self.targets = targets
        return profile

    async def set_profile(self, profile: UserProfile) -> Nutrition:
        """Replace the profile wholesale and re-derive targets.

        Raises ``InvalidProfileError`` before any state changes when the
        profile cannot produce targets.
        """
        targets = compute_targets(profile)
        self.profile = profile
        self.targets = targets
        await self.storage.set_item(USER_PROFILE_KEY, profile.model_dump_json())
        return targets

    async def clear_profile(self) -> None:
        """Forget the profile, its targets and the displayed meal plan."""
        self.profile = None
        self.targets = None
        self.plan_store.clear_current_meal_plan()
        await self.storage.remove_item(USER_PROFILE_KEY)

    def update_targets(
        self, targets: Nutrition, *, accept_invalid: bool = False
    ) -> MacroValidation:
        """Apply manually edited targets after a macro check.

        Inconsistent targets are only applied with ``accept_invalid``; the
        returned validation carries the suggested correction either way.
        """
        validation = validate_macros(targets)
        if validation.valid or accept_invalid:
            self.targets = targets
        else:
            _logger.info("Manual targets rejected: %s", validation.message)
        return validation
