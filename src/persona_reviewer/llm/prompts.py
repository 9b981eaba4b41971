"""
Prompt Composer

Builds the complete review prompt handed to a text-generation backend,
either for a selected reviewer persona or for the integrated full-stack
reviewer.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..models.diff import DiffRecord
from ..models.persona import Persona, PersonaProfile, SUPPORTED_LANGUAGES, get_profile


logger = logging.getLogger(__name__)

MAX_FILE_LIST = 20

PROMPT_SEPARATOR = "\n\n---\n\n"


class PromptComposer:
    """
    Composes review prompts from fixed templates and diff content.

    Every prompt has a system half (reviewer identity, diff reading rules,
    writing style) and a user half (change summary, closing question and
    the diffs themselves). Output depends only on the inputs, so the same
    persona and diffs always give the same string.
    """

    def __init__(
        self,
        language: str = "korean",
        max_file_list: int = MAX_FILE_LIST,
        system_prompt: Optional[str] = None,
    ):
        """
        Initialize prompt composer.

        Args:
            language: Language for prompts ("korean" or "english")
            max_file_list: Maximum number of paths listed in the change summary
            system_prompt: Operator-provided system prompt for integrated mode
        """
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        if max_file_list <= 0:
            raise ValueError("max_file_list must be positive")

        self.language = language
        self.max_file_list = max_file_list
        self.custom_system_prompt = system_prompt if system_prompt and system_prompt.strip() else None

        self.templates = self._load_templates()

    def compose(self, persona: Persona, diffs: Optional[Sequence[DiffRecord]]) -> str:
        """
        Build the complete prompt for a persona review.

        Args:
            persona: Selected reviewer persona
            diffs: Changed files of the merge request

        Returns:
            Prompt text, or the no-changes message when there are no diffs
        """
        if not diffs:
            return self.no_changes_message()

        profile = get_profile(persona, self.language)
        logger.debug(f"Building {persona.value} prompt for {len(diffs)} files")

        return self._combine(
            self._build_system_prompt(profile),
            self._build_user_prompt(profile, diffs),
        )

    def compose_integrated(self, diffs: Optional[Sequence[DiffRecord]]) -> str:
        """
        Build the complete prompt for the integrated full-stack review.

        Args:
            diffs: Changed files of the merge request

        Returns:
            Prompt text, or the no-changes message when there are no diffs
        """
        if not diffs:
            return self.no_changes_message()

        logger.debug(f"Building integrated prompt for {len(diffs)} files")

        return self._combine(self.system_prompt(), self.user_prompt(None, diffs))

    def system_prompt(self, persona: Optional[Persona] = None) -> str:
        """
        System half of the prompt, for backends that take separate roles.

        Args:
            persona: Reviewer persona, or None for the integrated reviewer
        """
        if persona is not None:
            return self._build_system_prompt(get_profile(persona, self.language))

        if self.custom_system_prompt:
            logger.debug("Using configured custom system prompt")
            return self.custom_system_prompt

        return self._build_system_prompt(self._integrated_profile())

    def user_prompt(self, persona: Optional[Persona], diffs: Optional[Sequence[DiffRecord]]) -> str:
        """User half of the prompt; the no-changes message when there are no diffs."""
        if not diffs:
            return self.no_changes_message()

        profile = get_profile(persona, self.language) if persona is not None else self._integrated_profile()
        return self._build_user_prompt(profile, diffs)

    def no_changes_message(self) -> str:
        return self.templates[self.language]["no_changes"]

    def prompt_status(self) -> Dict[str, Any]:
        """Current prompt settings, for status and debugging endpoints."""
        return {
            "custom_system_prompt_configured": self.custom_system_prompt is not None,
            "system_prompt_length": len(self.system_prompt()),
            "default_system_prompt_used": self.custom_system_prompt is None,
            "language": self.language,
            "max_file_list": self.max_file_list,
        }

    def _integrated_profile(self) -> PersonaProfile:
        template = self.templates[self.language]
        return PersonaProfile(
            display_name=template["integrated_name"],
            description=template["integrated_description"],
            emoji=Persona.GENERAL_REVIEWER.emoji,
            identity=template["integrated_identity"],
            core_interests=template["integrated_interests"],
            closing_question=template["integrated_closing_question"],
        )

    def _build_system_prompt(self, profile: PersonaProfile) -> str:
        template = self.templates[self.language]

        sections = [
            f"{profile.identity}.",
            f"{template['interests_header']}\n{profile.core_interests}",
            template["diff_rules"],
            template["style_rules"],
        ]
        return "\n\n".join(sections)

    def _build_user_prompt(self, profile: PersonaProfile, diffs: Sequence[DiffRecord]) -> str:
        template = self.templates[self.language]

        sections = [
            template["request"],
            self._format_change_summary(diffs),
            f"{template['closing_header']}\n{profile.closing_question}",
            f"{template['diff_header']}\n{self._format_diffs(diffs)}",
        ]
        return "\n\n".join(sections)

    def _format_change_summary(self, diffs: Sequence[DiffRecord]) -> str:
        """Format file count and the leading file paths."""
        template = self.templates[self.language]

        lines = [
            template["context_header"],
            template["file_count"].format(count=len(diffs)),
            template["file_list"].format(limit=self.max_file_list),
        ]
        lines.extend(f"  - {diff.display_path}" for diff in list(diffs)[:self.max_file_list])

        return "\n".join(lines)

    def _format_diffs(self, diffs: Sequence[DiffRecord]) -> str:
        """Render every diff as a fenced block under its path."""
        rendered: List[str] = []
        for diff in diffs:
            rendered.append(f"File: {diff.display_path}\n```diff\n{diff.patch_text or ''}\n```")
        return "\n\n".join(rendered)

    def _combine(self, system_prompt: str, user_prompt: str) -> str:
        return f"{system_prompt}{PROMPT_SEPARATOR}{user_prompt}"

    def _load_templates(self) -> Dict[str, Dict[str, str]]:
        """Load prompt templates for different languages."""
        return {
            "korean": {
                "no_changes": "🤖 변경 사항이 없어 리뷰를 건너뜁니다.",

                "interests_header": "[핵심 관심사]",

                "diff_rules": """[diff 해석 규칙]
- unified diff의 `-`는 과거 코드(제거됨)를, `+`는 현재 코드(추가/수정됨)를 의미합니다.
- `-`에서 보인 문제를 `+`에서 해결했다면 이번 MR에서 해결된 것입니다.
- 이미 해결된 사항을 현재도 남아있는 문제처럼 지적하지 않습니다.
- 지적은 현재 코드 기준으로 추가 조치가 필요한 항목에만 합니다.""",

                "style_rules": """[작성 방식]
- 마크다운 문법(제목, 굵은 글씨, 표, 코드 블록)을 쓰지 않고 평범한 문장으로 작성합니다.
- 지적할 내용은 가장 중요한 2~3개로 제한합니다.
- 옆자리 동료에게 이야기하듯 자연스러운 대화체로 작성합니다.
- 첫 문장은 반드시 "안녕하세요. MR 잘 봤습니다."로 시작합니다.
- 반드시 diff에 보이는 사실에만 근거하고 추측이나 단정은 하지 않습니다.""",

                "request": "다음 변경사항에 대해 위의 규칙을 지켜 리뷰를 작성하세요.",

                "context_header": "[변경 요약]",

                "file_count": "- 변경 파일 수: {count}",

                "file_list": "- 변경 파일 목록(상위 {limit}개까지 표시):",

                "closing_header": "[마지막으로 스스로에게 물어볼 질문]",

                "diff_header": "[변경사항 unified diff]",

                "integrated_name": "General Reviewer",

                "integrated_description": "전체적인 코드 품질과 기본적인 개선사항을 검토합니다.",

                "integrated_identity": "당신은 백엔드, 프론트엔드, 인프라를 두루 경험한 숙련된 풀스택 코드 리뷰어입니다",

                "integrated_interests": (
                    "기능의 정확성, 보안, 성능, 데이터 정합성, 설계 구조, 테스트와 가독성을 "
                    "균형 있게 살핍니다. 한 분야에 치우치지 않고 이번 변경에서 "
                    "실제로 문제가 될 가능성이 가장 큰 부분을 먼저 짚습니다."
                ),

                "integrated_closing_question": "이 변경을 지금 그대로 배포해도 괜찮을까요?",
            },

            "english": {
                "no_changes": "🤖 No changes found, skipping the review.",

                "interests_header": "[Core interests]",

                "diff_rules": """[Reading the diff]
- In a unified diff, `-` marks past code (removed) and `+` marks current code (added or changed).
- If a problem visible in `-` is fixed in `+`, it was resolved by this merge request.
- Never report an already resolved issue as if it were still present.
- Only raise items that still need action in the current code.""",

                "style_rules": """[Writing style]
- Do not use markdown (headings, bold text, tables, code blocks); write plain sentences.
- Limit yourself to the 2-3 most important issues.
- Write in a natural, conversational tone, as if talking to a teammate.
- Always start with the sentence "Hi, I went through the MR."
- Base every point strictly on facts visible in the diff; do not guess or overstate.""",

                "request": "Review the following changes while following the rules above.",

                "context_header": "[Change summary]",

                "file_count": "- Changed files: {count}",

                "file_list": "- Changed file list (up to the first {limit}):",

                "closing_header": "[Question to ask yourself at the end]",

                "diff_header": "[Unified diff of the changes]",

                "integrated_name": "General Reviewer",

                "integrated_description": "Reviews overall code quality and basic improvements.",

                "integrated_identity": (
                    "You are a seasoned full-stack code reviewer with experience across backend, "
                    "frontend and infrastructure"
                ),

                "integrated_interests": (
                    "You weigh correctness, security, performance, data integrity, design, tests "
                    "and readability evenly. You do not lean toward one specialty and raise first "
                    "whatever is most likely to cause a real problem in this change."
                ),

                "integrated_closing_question": "Would it be safe to ship this change as it is right now?",
            },
        }
