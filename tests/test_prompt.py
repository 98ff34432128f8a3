"""Tests for interactive branch selection."""

import unittest

from git_batch_merge.prompt import (
    BranchSelector,
    PromptState,
    resolve_multiple,
    resolve_single,
    split_remembered,
)


BRANCHES = ['main', 'feature/x', 'feature/y']


class ScriptedConsole:
    """Feeds canned answers to a BranchSelector and records its output."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []
        self.output = []

    def read_line(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def write(self, text):
        self.output.append(text)

    def selector(self):
        return BranchSelector(read_line=self.read_line, write=self.write)


class TestResolveSingle(unittest.TestCase):
    """Tests for resolve_single."""

    def test_valid_index(self):
        resolution = resolve_single('2', BRANCHES)
        self.assertEqual(resolution.state, PromptState.VALID)
        self.assertEqual(resolution.value, 'feature/x')

    def test_index_with_whitespace(self):
        resolution = resolve_single(' 3 ', BRANCHES)
        self.assertEqual(resolution.value, 'feature/y')

    def test_empty_with_default(self):
        resolution = resolve_single('', BRANCHES, 'main')
        self.assertEqual(resolution.state, PromptState.VALID)
        self.assertEqual(resolution.value, 'main')
        self.assertEqual(resolution.message, 'Using default: main')

    def test_empty_without_default(self):
        resolution = resolve_single('', BRANCHES)
        self.assertEqual(resolution.state, PromptState.DONE)
        self.assertIsNone(resolution.value)
        self.assertEqual(resolution.message, 'No selection made.')

    def test_out_of_range(self):
        for line in ('0', '4', '99', '-1'):
            with self.subTest(line=line):
                resolution = resolve_single(line, BRANCHES)
                self.assertEqual(resolution.state, PromptState.INVALID)
                self.assertIn('between 1 and 3', resolution.message)

    def test_not_a_number(self):
        for line in ('abc', '1,2', ' '):
            with self.subTest(line=line):
                resolution = resolve_single(line, BRANCHES)
                self.assertEqual(resolution.state, PromptState.INVALID)
                self.assertIn('single number', resolution.message)


class TestResolveMultiple(unittest.TestCase):
    """Tests for resolve_multiple."""

    def test_ranges(self):
        resolution = resolve_multiple('3,1-2', BRANCHES)
        self.assertEqual(resolution.state, PromptState.VALID)
        self.assertEqual(resolution.value, ['feature/y', 'main', 'feature/x'])

    def test_one_bad_index_rejects_batch(self):
        resolution = resolve_multiple('1,4', BRANCHES)
        self.assertEqual(resolution.state, PromptState.INVALID)
        self.assertIsNone(resolution.value)
        self.assertIn('Index 4 is out of range', resolution.message)

    def test_huge_range_rejected(self):
        """A mistyped huge range asks again instead of expanding it."""
        resolution = resolve_multiple('1-100000000000', BRANCHES)

        self.assertEqual(resolution.state, PromptState.INVALID)
        self.assertIn('Index 100000000000 is out of range', resolution.message)

    def test_parse_error(self):
        resolution = resolve_multiple('3-1', BRANCHES)
        self.assertEqual(resolution.state, PromptState.INVALID)
        self.assertIn('3-1', resolution.message)
        self.assertIn('e.g., 1,3-5', resolution.message)

    def test_empty_with_default(self):
        resolution = resolve_multiple('', BRANCHES, ['feature/x'])
        self.assertEqual(resolution.state, PromptState.VALID)
        self.assertEqual(resolution.value, ['feature/x'])

    def test_empty_without_default(self):
        resolution = resolve_multiple('', BRANCHES)
        self.assertEqual(resolution.state, PromptState.DONE)
        self.assertEqual(resolution.value, [])


class TestSplitRemembered(unittest.TestCase):

    def test_split(self):
        self.assertEqual(split_remembered('a,b/c'), ['a', 'b/c'])
        self.assertEqual(split_remembered('main'), ['main'])
        self.assertEqual(split_remembered(''), [])
        self.assertEqual(split_remembered(None), [])


class TestSelectBranch(unittest.TestCase):
    """Tests for BranchSelector.select_branch."""

    def test_prints_tree_and_returns_choice(self):
        console = ScriptedConsole(['3'])

        result = console.selector().select_branch('local', BRANCHES)

        self.assertEqual(result, 'feature/y')
        self.assertTrue(any('Please select a local branch:' in line for line in console.output))
        self.assertIn('├── [1] main', console.output)
        self.assertIn('    └── [3] y', console.output)
        self.assertEqual(console.prompts, ['Enter number (1-3): '])

    def test_reprompts_until_valid(self):
        """Out-of-range and non-numeric answers ask again."""
        console = ScriptedConsole(['99', 'abc', '1'])

        result = console.selector().select_branch('local', BRANCHES)

        self.assertEqual(result, 'main')
        self.assertEqual(len(console.prompts), 3)
        self.assertIn(
            'Invalid number. Please enter a number between 1 and 3.', console.output
        )
        self.assertIn('Invalid input. Please enter a single number.', console.output)

    def test_empty_uses_listed_default(self):
        console = ScriptedConsole([''])

        result = console.selector().select_branch('local', BRANCHES, 'feature/x')

        self.assertEqual(result, 'feature/x')
        self.assertEqual(
            console.prompts, ['Enter number (1-3) [default: feature/x]: ']
        )
        self.assertIn('Using default: feature/x', console.output)

    def test_default_not_listed_is_ignored(self):
        console = ScriptedConsole([''])

        result = console.selector().select_branch('local', BRANCHES, 'gone')

        self.assertIsNone(result)
        self.assertEqual(console.prompts, ['Enter number (1-3): '])
        self.assertIn('No selection made.', console.output)

    def test_empty_without_default_returns_none(self):
        console = ScriptedConsole(['', '1'])

        result = console.selector().select_branch('local', BRANCHES)

        self.assertIsNone(result)
        self.assertEqual(len(console.prompts), 1)

    def test_end_of_input_returns_none(self):
        console = ScriptedConsole(['abc'])

        result = console.selector().select_branch('local', BRANCHES)

        self.assertIsNone(result)
        self.assertEqual(len(console.prompts), 2)


class TestSelectBranches(unittest.TestCase):
    """Tests for BranchSelector.select_branches."""

    def test_range_selection(self):
        console = ScriptedConsole(['1,3'])

        result = console.selector().select_branches('source', BRANCHES)

        self.assertEqual(result, ['main', 'feature/y'])
        self.assertEqual(console.prompts, ['Enter number (1-3) (e.g., 1,3-5,8): '])

    def test_bad_batch_reprompts(self):
        console = ScriptedConsole(['1,5', '2-3'])

        result = console.selector().select_branches('source', BRANCHES)

        self.assertEqual(result, ['feature/x', 'feature/y'])
        self.assertEqual(len(console.prompts), 2)

    def test_single_remembered_branch_default(self):
        console = ScriptedConsole([''])

        result = console.selector().select_branches('source', BRANCHES, 'main')

        self.assertEqual(result, ['main'])
        self.assertEqual(
            console.prompts, ['Enter number (1-3) (e.g., 1,3-5,8) [default: main]: ']
        )

    def test_multiple_remembered_branches_default(self):
        console = ScriptedConsole([''])

        result = console.selector().select_branches(
            'source', BRANCHES, 'feature/y,main'
        )

        self.assertEqual(result, ['feature/y', 'main'])

    def test_partially_listed_default_is_ignored(self):
        console = ScriptedConsole([''])

        result = console.selector().select_branches('source', BRANCHES, 'main,gone')

        self.assertEqual(result, [])
        self.assertIn('No selection made.', console.output)

    def test_menu_rebuilt_per_prompt(self):
        console = ScriptedConsole(['1', '1'])
        selector = console.selector()

        first = selector.select_branches('source', ['a', 'b'])
        second = selector.select_branches('source', ['b', 'a'])

        self.assertEqual(first, ['a'])
        self.assertEqual(second, ['b'])


if __name__ == '__main__':
    unittest.main()
