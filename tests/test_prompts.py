# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest

from livdaily.content.models import Module
from livdaily.generation.prompts import build_prompt


class TestBuildPrompt(unittest.TestCase):
    def test_is_deterministic(self) -> None:
        a = build_prompt("mindfulness", "stress relief", 10, "gentle", {"b": 1, "a": [1, 2]})
        b = build_prompt("mindfulness", "stress relief", 10, "gentle", {"b": 1, "a": [1, 2]})
        self.assertEqual(a, b)

    def test_system_has_preamble_guide_and_default_tone(self) -> None:
        prompt = build_prompt("mindfulness", "stress relief")
        self.assertTrue(
            prompt.system.startswith("You are an expert wellness coach creating high-quality mindfulness content.")
        )
        self.assertIn("breathing cues", prompt.system)
        self.assertTrue(prompt.system.endswith("Be warm, supportive, and practical."))

    def test_explicit_tone(self) -> None:
        prompt = build_prompt("calm", "unwind after work", tone="playful")
        self.assertIn("Use a playful tone.", prompt.system)
        self.assertNotIn("Be warm, supportive, and practical.", prompt.system)

    def test_user_clauses(self) -> None:
        prompt = build_prompt("movement", "build strength", 20, constraints={"noEquipment": True, "level": "beginner"})
        lines = prompt.user.split("\n")
        self.assertEqual(lines[0], "Create movement content to help with: build strength")
        self.assertIn("Time available: 20 minutes.", lines)
        expected = json.dumps({"level": "beginner", "noEquipment": True}, sort_keys=True, ensure_ascii=False)
        self.assertIn(f"Constraints: {expected}", lines)
        self.assertIn("sets x reps", prompt.user)
        self.assertIn("explicit category", lines[-1])

    def test_optional_clauses_are_omitted(self) -> None:
        prompt = build_prompt("sleep", "fall asleep faster")
        self.assertNotIn("Time available", prompt.user)
        self.assertNotIn("Constraints", prompt.user)

    def test_constraint_key_order_does_not_matter(self) -> None:
        a = build_prompt("focus", "deep work", constraints={"x": 1, "y": 2})
        b = build_prompt("focus", "deep work", constraints={"y": 2, "x": 1})
        self.assertEqual(a.user, b.user)

    def test_fractional_minutes(self) -> None:
        prompt = build_prompt("breathwork", "reset", 2.5)
        self.assertIn("Time available: 2.5 minutes.", prompt.user)

    def test_unknown_module_uses_generic_guide(self) -> None:
        prompt = build_prompt("astrology", "find balance")
        self.assertIn("high-quality astrology content.", prompt.system)
        self.assertIn("practical wellness content", prompt.system)
        self.assertIn("short, clearly separated steps", prompt.user)
        self.assertIn("explicit category", prompt.user)

    def test_accepts_module_enum(self) -> None:
        self.assertEqual(build_prompt(Module.grounding, "panic"), build_prompt("grounding", "panic"))

    def test_every_module_has_its_own_guide(self) -> None:
        generic = build_prompt("unknown-module", "goal").system.split(". ", 1)[1]
        for module in Module:
            with self.subTest(module=module.value):
                system = build_prompt(module, "goal").system
                self.assertNotIn(generic, system)


if __name__ == "__main__":
    unittest.main()
