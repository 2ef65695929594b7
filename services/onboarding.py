"""Onboarding wizard: the three-step first-run profile form.

Step 1 collects name and city (both required), step 2 health conditions and
sensitivity, step 3 commute mode. Completing step 3 yields a UserProfile.
"""
from dataclasses import replace
from typing import Optional

from models.profile import CommuteMode, Sensitivity, UserProfile

TOTAL_STEPS = 3


class OnboardingWizard:

    def __init__(self):
        self.step = 1
        self.profile = UserProfile()

    def set_identity(self, name: str, city: str):
        self.profile = replace(self.profile, name=name.strip(), city=city.strip())

    def set_sensitivity(self, sensitivity: Sensitivity):
        self.profile = replace(self.profile, sensitivity=Sensitivity(sensitivity))

    def set_commute_mode(self, mode: CommuteMode):
        self.profile = replace(self.profile, commute_mode=CommuteMode(mode))

    def toggle_condition(self, condition: str):
        current = self.profile.health_conditions
        if condition in current:
            conditions = [c for c in current if c != condition]
        else:
            conditions = [*current, condition]
        self.profile = replace(self.profile, health_conditions=conditions)

    def add_condition(self, condition: str):
        condition = condition.strip()
        if condition and condition not in self.profile.health_conditions:
            self.profile = self.profile.with_condition_added(condition)

    def is_step_valid(self) -> bool:
        if self.step == 1:
            return self.profile.is_complete
        return True  # steps 2 and 3 are optional

    def next(self) -> Optional[UserProfile]:
        """Advance one step; returns the finished profile after the last step."""
        if not self.is_step_valid():
            return None
        if self.step < TOTAL_STEPS:
            self.step += 1
            return None
        return self.profile

    def back(self):
        if self.step > 1:
            self.step -= 1
