"""
Unit tests for data models.

Covers diff records, persona profiles and selection results.
"""

import pytest
from dataclasses import FrozenInstanceError
from pydantic import ValidationError

from persona_reviewer.models.diff import DiffRecord, DiffRecordRequest, records_from_payload, UNKNOWN_PATH
from persona_reviewer.models.persona import Persona, PersonaProfile, PERSONA_PROFILES, get_profile
from persona_reviewer.models.selection import PersonaSelection


class TestDiffRecord:
    """Unit tests for DiffRecord."""

    def test_effective_path_prefers_new_path(self):
        record = DiffRecord(old_path="old/Name.java", new_path="new/Name.java", patch_text="+x")

        assert record.effective_path == "new/Name.java"
        assert record.display_path == "new/Name.java"

    def test_effective_path_falls_back_to_old_path(self):
        """Deleted files only carry the old path."""
        record = DiffRecord(old_path="old/Name.java", new_path=None)
        assert record.effective_path == "old/Name.java"

        record = DiffRecord(old_path="old/Name.java", new_path="")
        assert record.effective_path == "old/Name.java"

    def test_record_without_paths(self):
        record = DiffRecord(patch_text="+x")

        assert record.effective_path is None
        assert not record.has_path
        assert record.display_path == UNKNOWN_PATH

    def test_has_patch(self):
        assert DiffRecord(new_path="a.py", patch_text="+x").has_patch
        assert not DiffRecord(new_path="a.py", patch_text="").has_patch
        assert not DiffRecord(new_path="a.py").has_patch

    def test_record_is_read_only(self):
        record = DiffRecord(new_path="a.py")

        with pytest.raises(FrozenInstanceError):
            record.new_path = "b.py"


class TestDiffRecordRequest:
    """Unit tests for GitLab diff payload validation."""

    def test_payload_conversion(self):
        payload = {
            "old_path": "src/App.tsx",
            "new_path": "src/App.tsx",
            "diff": "@@ -1 +1 @@\n-old\n+new",
            "new_file": False,
            "renamed_file": False,
            "deleted_file": False,
            "a_mode": "100644",
        }

        record = DiffRecordRequest.model_validate(payload).to_record()

        assert record == DiffRecord(
            old_path="src/App.tsx",
            new_path="src/App.tsx",
            patch_text="@@ -1 +1 @@\n-old\n+new",
        )

    def test_change_flags_are_not_kept(self):
        request = DiffRecordRequest.model_validate({
            "old_path": "legacy/Job.java",
            "diff": "-class Job {}",
            "deleted_file": True,
            "new_file": False,
        })

        assert set(DiffRecordRequest.model_fields) == {"old_path", "new_path", "diff"}
        assert request.to_record() == DiffRecord(old_path="legacy/Job.java", patch_text="-class Job {}")

    def test_blank_paths_become_none(self):
        record = DiffRecordRequest(old_path="a.py", new_path="   ").to_record()
        assert record.new_path is None
        assert record.effective_path == "a.py"

    def test_invalid_payload(self):
        with pytest.raises(ValidationError):
            DiffRecordRequest.model_validate({"new_path": ["not", "a", "string"]})

    def test_records_from_payload(self):
        records = records_from_payload([
            {"new_path": "a.py", "diff": "+a"},
            {"old_path": "b.py", "diff": None, "deleted_file": True},
        ])

        assert [r.effective_path for r in records] == ["a.py", "b.py"]
        assert records[1].patch_text is None

    def test_records_from_empty_payload(self):
        assert records_from_payload(None) == []
        assert records_from_payload([]) == []


class TestPersona:
    """Unit tests for persona definitions."""

    def test_declaration_order(self):
        assert Persona.ordered() == [
            Persona.GENERAL_REVIEWER,
            Persona.SECURITY_AUDITOR,
            Persona.PERFORMANCE_TUNER,
            Persona.DATA_GUARDIAN,
            Persona.BUSINESS_ANALYST,
            Persona.ARCHITECT,
            Persona.QUALITY_COACH,
            Persona.BACKEND_SPECIALIST,
            Persona.FRONTEND_SPECIALIST,
            Persona.DEVOPS_ENGINEER,
            Persona.DATA_SCIENTIST,
        ]
        assert [p.rank for p in Persona.ordered()] == list(range(11))

    def test_from_key(self):
        assert Persona.from_key("security_auditor") is Persona.SECURITY_AUDITOR
        assert Persona.from_key("SECURITY_AUDITOR") is Persona.SECURITY_AUDITOR

        with pytest.raises(ValueError):
            Persona.from_key("chief_reviewer")

    @pytest.mark.parametrize("language", ["korean", "english"])
    def test_every_persona_has_a_profile(self, language):
        profiles = PERSONA_PROFILES[language]

        assert set(profiles) == set(Persona)
        for persona in Persona:
            profile = profiles[persona]
            assert profile.display_name
            assert profile.emoji
            assert profile.identity
            assert profile.core_interests
            assert profile.closing_question

    def test_display_metadata_is_shared_across_languages(self):
        for persona in Persona:
            korean = get_profile(persona, "korean")
            english = get_profile(persona, "english")
            assert korean.display_name == english.display_name == persona.display_name
            assert korean.emoji == english.emoji == persona.emoji

    def test_known_display_metadata(self):
        assert Persona.SECURITY_AUDITOR.display_name == "Security Auditor"
        assert Persona.SECURITY_AUDITOR.emoji == "🔒"
        assert Persona.GENERAL_REVIEWER.emoji == "🤖"

    def test_profiles_are_read_only(self):
        with pytest.raises(TypeError):
            PERSONA_PROFILES["korean"][Persona.ARCHITECT] = None

        with pytest.raises(FrozenInstanceError):
            Persona.ARCHITECT.profile().identity = "changed"

    def test_unknown_language(self):
        with pytest.raises(ValueError):
            get_profile(Persona.ARCHITECT, "french")

    def test_profile_validation(self):
        with pytest.raises(ValueError):
            PersonaProfile(
                display_name="Nobody",
                description="",
                emoji="",
                identity="   ",
                core_interests="x",
                closing_question="y",
            )


class TestPersonaSelection:
    """Unit tests for PersonaSelection."""

    def test_mentions_are_frozen(self):
        selection = PersonaSelection(
            primary=Persona.SECURITY_AUDITOR,
            primary_score=70,
            mentions={Persona.BACKEND_SPECIALIST},
        )

        assert isinstance(selection.mentions, frozenset)
        assert not selection.is_fallback

    def test_primary_cannot_be_mentioned(self):
        with pytest.raises(ValueError):
            PersonaSelection(
                primary=Persona.SECURITY_AUDITOR,
                primary_score=70,
                mentions=frozenset({Persona.SECURITY_AUDITOR}),
            )

    def test_ordered_mentions_follow_declaration_order(self):
        selection = PersonaSelection(
            primary=Persona.GENERAL_REVIEWER,
            primary_score=0,
            mentions=frozenset({Persona.DATA_SCIENTIST, Persona.SECURITY_AUDITOR, Persona.ARCHITECT}),
        )

        assert selection.ordered_mentions == [
            Persona.SECURITY_AUDITOR,
            Persona.ARCHITECT,
            Persona.DATA_SCIENTIST,
        ]
        assert selection.is_fallback
