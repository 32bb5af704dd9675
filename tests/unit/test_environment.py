"""
Unit tests for the gymnasium environment.

Tests spaces, action encoding, rewards, episode termination and the
action mask.
"""
import numpy as np
import pytest

from minefield import Board, BoardConfig, Game, Intent, MinesweeperEnv
from minefield.environment import LOSS_REWARD, NO_OP_REWARD, REVEAL_REWARD, WIN_REWARD


@pytest.fixture
def env() -> MinesweeperEnv:
    environment = MinesweeperEnv(BoardConfig(9, 9, 10), render_mode="ansi")
    environment.reset(seed=42)
    return environment


@pytest.fixture
def fixed_env(center_mine_board: Board) -> MinesweeperEnv:
    """3x3 environment playing a known board with a centre mine."""
    environment = MinesweeperEnv(BoardConfig(3, 3, 1))
    environment.reset(seed=0)
    environment.game = Game.from_board(center_mine_board)
    return environment


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_observation_space(self, env: MinesweeperEnv) -> None:
        assert env.observation_space.shape == (9, 9)
        assert env.observation_space.dtype == np.int8

    def test_action_space_covers_three_intents(self, env: MinesweeperEnv) -> None:
        assert env.action_space.n == 3 * 81

    def test_reset_observation_all_hidden(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["steps"] == 0
        assert info["total_safe"] == 71
        assert info["game_state"] == "NOT_STARTED"

    def test_default_max_steps(self, env: MinesweeperEnv) -> None:
        assert env.max_steps == 3 * 81


# ============================================================================
# Action Encoding Tests
# ============================================================================

class TestActionEncoding:
    """Test flat action indices."""

    @pytest.mark.parametrize(
        "action,expected",
        [
            (0, (Intent.REVEAL, 0, 0)),
            (10, (Intent.REVEAL, 1, 1)),
            (81 + 5, (Intent.MARK, 0, 5)),
            (2 * 81 + 80, (Intent.CHORD, 8, 8)),
        ],
    )
    def test_decode(self, env: MinesweeperEnv, action: int, expected: tuple) -> None:
        assert env.decode_action(action) == expected

    def test_encode_inverts_decode(self, env: MinesweeperEnv) -> None:
        assert env.encode_action(Intent.MARK, 3, 7) == 81 + 3 * 9 + 7
        assert env.decode_action(env.encode_action(Intent.CHORD, 2, 4)) == (Intent.CHORD, 2, 4)


# ============================================================================
# Reward Tests
# ============================================================================

class TestRewards:
    """Test rewards and termination."""

    def test_reveal_reward(self, fixed_env: MinesweeperEnv) -> None:
        action = fixed_env.encode_action(Intent.REVEAL, 0, 0)
        obs, reward, terminated, truncated, info = fixed_env.step(action)
        assert reward == REVEAL_REWARD
        assert obs[0, 0] == 1
        assert terminated is False
        assert info["revealed"] == 1

    def test_repeat_reveal_is_penalised(self, fixed_env: MinesweeperEnv) -> None:
        action = fixed_env.encode_action(Intent.REVEAL, 0, 0)
        fixed_env.step(action)
        _, reward, _, _, _ = fixed_env.step(action)
        assert reward == NO_OP_REWARD

    def test_mark_reward_is_zero(self, fixed_env: MinesweeperEnv) -> None:
        _, reward, _, _, info = fixed_env.step(fixed_env.encode_action(Intent.MARK, 1, 1))
        assert reward == 0.0
        assert info["mines_remaining"] == 0

    def test_mine_ends_episode(self, fixed_env: MinesweeperEnv) -> None:
        obs, reward, terminated, _, info = fixed_env.step(
            fixed_env.encode_action(Intent.REVEAL, 1, 1)
        )
        assert reward == LOSS_REWARD
        assert terminated is True
        assert obs[1, 1] == 9
        assert info["game_state"] == "LOST"

    def test_clearing_board_wins(self, fixed_env: MinesweeperEnv) -> None:
        safe = [(r, c) for r in range(3) for c in range(3) if (r, c) != (1, 1)]
        for row, col in safe[:-1]:
            fixed_env.step(fixed_env.encode_action(Intent.REVEAL, row, col))
        _, reward, terminated, _, info = fixed_env.step(
            fixed_env.encode_action(Intent.REVEAL, *safe[-1])
        )
        assert reward == WIN_REWARD
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_zero_max_steps_is_kept(self) -> None:
        """An explicit zero truncates the first step instead of using the default."""
        environment = MinesweeperEnv(BoardConfig(3, 3, 1), max_steps=0)
        assert environment.max_steps == 0
        environment.reset(seed=0)
        _, _, _, truncated, _ = environment.step(environment.encode_action(Intent.MARK, 0, 0))
        assert truncated is True

    def test_truncation_after_max_steps(self) -> None:
        environment = MinesweeperEnv(BoardConfig(4, 4, 2), max_steps=2)
        environment.reset(seed=0)
        mark = environment.encode_action(Intent.MARK, 0, 0)
        _, _, _, truncated, _ = environment.step(mark)
        assert truncated is False
        _, _, terminated, truncated, _ = environment.step(mark)
        assert terminated is False
        assert truncated is True


# ============================================================================
# Seeding, Rendering and Mask Tests
# ============================================================================

class TestEpisodes:
    """Test reproducibility, rendering and masks."""

    def test_same_seed_same_episode(self) -> None:
        first = MinesweeperEnv()
        second = MinesweeperEnv()
        first.reset(seed=7)
        second.reset(seed=7)
        action = first.encode_action(Intent.REVEAL, 4, 4)
        obs_first, *_ = first.step(action)
        obs_second, *_ = second.step(action)
        np.testing.assert_array_equal(obs_first, obs_second)

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        text = env.render()
        assert isinstance(text, str)
        assert text.split("\n")[0] == " ".join(["."] * 9)

    def test_mask_at_start(self, env: MinesweeperEnv) -> None:
        mask = env.get_action_mask()
        assert mask.shape == (3 * 81,)
        assert mask[:81].all()
        assert mask[81:162].all()
        assert not mask[162:].any()

    def test_mask_after_reveal(self, fixed_env: MinesweeperEnv) -> None:
        fixed_env.step(fixed_env.encode_action(Intent.REVEAL, 0, 0))
        mask = fixed_env.get_action_mask()
        assert not mask[fixed_env.encode_action(Intent.REVEAL, 0, 0)]
        assert not mask[fixed_env.encode_action(Intent.MARK, 0, 0)]
        assert mask[fixed_env.encode_action(Intent.CHORD, 0, 0)]

    def test_mask_empty_when_over(self, fixed_env: MinesweeperEnv) -> None:
        fixed_env.step(fixed_env.encode_action(Intent.REVEAL, 1, 1))
        assert not fixed_env.get_action_mask().any()
