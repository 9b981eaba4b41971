#!/usr/bin/env python3
"""
Persona Review Demo

Demonstrates persona selection and prompt composition for a merge request.

Usage:
    python examples/persona_review_demo.py [diffs.json] [config.yaml]

The optional JSON file holds a list of GitLab MR diff objects
(old_path, new_path, diff, ...). Without it a small built-in sample is used.
"""

import sys
import os
import json
import logging

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from persona_reviewer.api import PersonaReviewAPI
from persona_reviewer.config import load_config


SAMPLE_PAYLOAD = [
    {
        "old_path": "src/main/java/com/shop/UserController.java",
        "new_path": "src/main/java/com/shop/UserController.java",
        "diff": (
            "@@ -21,6 +21,7 @@ public class UserController {\n"
            "+    @PreAuthorize(\"hasRole('ADMIN')\")\n"
            "     @GetMapping(\"/users/{id}\")\n"
            "     public UserResponse find(@PathVariable Long id) {"
        ),
    },
    {
        "old_path": "src/main/resources/application.yml",
        "new_path": "src/main/resources/application.yml",
        "diff": "@@ -1,3 +1,4 @@\n server:\n   port: 8080\n+  shutdown: graceful",
    },
]


def setup_logging():
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_payload(path):
    """Load GitLab diff objects from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)
    if not isinstance(payload, list):
        raise ValueError("Diff file must contain a JSON list")
    return payload


def print_header():
    """Print demo header."""
    print("🤖 Persona Reviewer - Demo")
    print("=" * 50)
    print("1. 🔍 Score reviewer personas against the diffs")
    print("2. 🎯 Select the primary persona and mentions")
    print("3. 📝 Compose the review prompt")
    print("4. 💬 Format a review body with the persona header")
    print()


def print_status(api: PersonaReviewAPI):
    """Print current engine settings."""
    status = api.status()

    print("🔧 Engine Settings")
    print("-" * 30)
    print(f"Mode: {status['mode']}")
    print(f"Language: {status['language']}")
    print(f"Thresholds: select >= {status['selection_threshold']}, mention >= {status['mention_threshold']}")
    for section, count in status['rules'].items():
        print(f"   - {section}: {count}")
    print()


def main():
    """Main demo function."""
    setup_logging()

    diff_path = sys.argv[1] if len(sys.argv) > 1 else None
    config_path = sys.argv[2] if len(sys.argv) > 2 else None

    print_header()

    try:
        payload = load_payload(diff_path) if diff_path else SAMPLE_PAYLOAD
        api = PersonaReviewAPI(config=load_config(config_path))
    except (OSError, ValueError) as e:
        print(f"❌ Setup failed: {e}")
        sys.exit(1)

    print_status(api)

    plan = api.prepare_review_from_payload(payload)

    print("🎯 Selection")
    print("-" * 30)
    print(f"Files changed: {plan.file_count}")
    print(f"Persona: {plan.persona.emoji} {plan.persona.display_name}")
    if plan.selection is not None:
        print(f"Score: {plan.selection.primary_score}")
        if plan.selection.mentions:
            print("Also worth a look: " + ", ".join(p.display_name for p in plan.selection.ordered_mentions))
    if plan.summary:
        print(f"Scores: {plan.summary}")
    print()

    print("📝 Prompt")
    print("-" * 30)
    print(plan.prompt)
    print()

    print("💬 Formatted review (placeholder content)")
    print("-" * 30)
    print(api.format_review(plan, "(generated review text goes here)"))


if __name__ == '__main__':
    main()
