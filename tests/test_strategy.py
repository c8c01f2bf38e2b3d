"""Tests for CPU strategies, the human adapter and the strategy factory."""

import pytest

from gridrace.car.car import Acceleration, CarStatus, CarView, ZERO_ACCELERATION
from gridrace.errors import InvalidAccelerationError
from gridrace.simulation.context import RaceContext
from gridrace.simulation.movement import (
    CarCollision,
    FinishCrossed,
    Legal,
    MovementResolver,
    WallCollision,
)
from gridrace.strategy import (
    CpuStrategy,
    FinishSeekingStrategy,
    HumanMoveProvider,
    RandomStrategy,
    WeightedStrategy,
    WeightedStrategyConfig,
    collision_rank,
    create_strategy,
    parse_acceleration,
    select_strategy,
)
from gridrace.track.track import Track


def view(position, velocity=(0, 0), car_id=0, status=CarStatus.RACING):
    return CarView(
        car_id=car_id,
        label=f"car{car_id}",
        is_human=False,
        position=position,
        velocity=velocity,
        status=status,
    )


ALL_CPU_STRATEGIES = [
    FinishSeekingStrategy,
    lambda: WeightedStrategy(),
    lambda: WeightedStrategy(sample=True, seed=1),
    lambda: RandomStrategy(seed=1),
]


@pytest.fixture
def box():
    """A single drivable cell enclosed by walls."""
    return Track.from_rows(["***", "*+*", "***"])


@pytest.fixture
def corridor():
    return Track.from_rows(["+        -"])


class TestFallback:
    """Test the least-bad choice when every move collides."""

    def test_collision_rank_order(self):
        """Test car collisions rank best, leaving the grid worst."""
        car = collision_rank(CarCollision(other_car_id=1, cell=(0, 0)))
        wall = collision_rank(WallCollision(cell=(0, 0)))
        edge = collision_rank(WallCollision(cell=(0, 0), out_of_bounds=True))
        legal = collision_rank(Legal(position=(0, 0), velocity=(0, 0)))
        assert legal < car < wall < edge

    def test_prefers_car_collision(self):
        probes = [
            (Acceleration(-1, 0), WallCollision(cell=(0, 0), out_of_bounds=True)),
            (Acceleration(0, 0), WallCollision(cell=(1, 0))),
            (Acceleration(1, 0), CarCollision(other_car_id=3, cell=(2, 0))),
        ]
        assert CpuStrategy.least_bad(probes) == Acceleration(1, 0)

    def test_prefers_wall_over_leaving_grid(self):
        probes = [
            (Acceleration(-1, 0), WallCollision(cell=(0, 0), out_of_bounds=True)),
            (Acceleration(1, 1), WallCollision(cell=(1, 0))),
        ]
        assert CpuStrategy.least_bad(probes) == Acceleration(1, 1)

    def test_ties_keep_candidate_order(self):
        probes = [
            (Acceleration(0, 1), WallCollision(cell=(1, 0))),
            (Acceleration(1, 1), WallCollision(cell=(2, 0))),
        ]
        assert CpuStrategy.least_bad(probes) == Acceleration(0, 1)

    def test_no_probes(self):
        assert CpuStrategy.least_bad([]) == ZERO_ACCELERATION

    @pytest.mark.parametrize("make", ALL_CPU_STRATEGIES)
    def test_all_collide(self, make, box):
        """Test every strategy still answers when nothing is safe."""
        car = view((1, 1), velocity=(3, 0))
        probes = CpuStrategy.probe(car, box, [])
        assert all(outcome.is_collision for _, outcome in probes)

        # Every candidate hits an in-grid wall, so candidate order decides
        assert make().choose_acceleration(car, box, []) == Acceleration(-1, -1)


class TestProbe:
    """Test candidate probing."""

    def test_probe_covers_all_choices(self, corridor):
        probes = CpuStrategy.probe(view((0, 0)), corridor, [])
        assert [acc for acc, _ in probes] == Acceleration.choices()

    def test_probe_ignores_crashed_and_self(self):
        """Test only other racing cars block a path."""
        track = Track.from_rows(["+     -"])
        car = view((0, 0), velocity=(1, 0), car_id=0)
        others = [
            view((2, 0), car_id=1, status=CarStatus.CRASHED),
            view((0, 0), car_id=0),
        ]
        probes = dict(CpuStrategy.probe(car, track, others))
        assert probes[Acceleration(1, 0)] == Legal(position=(2, 0), velocity=(2, 0))

    def test_probe_sees_racing_cars(self):
        track = Track.from_rows(["+     -"])
        car = view((0, 0), velocity=(1, 0), car_id=0)
        probes = dict(CpuStrategy.probe(car, track, [view((2, 0), car_id=1)]))
        assert probes[Acceleration(1, 0)] == CarCollision(other_car_id=1, cell=(2, 0))


class TestStrategies:
    """Test strategy choices."""

    @pytest.mark.parametrize("make", ALL_CPU_STRATEGIES)
    def test_only_safe_move_chosen(self, make, box):
        """Test the single non-colliding candidate is selected."""
        acc = make().choose_acceleration(view((1, 1)), box, [])
        assert acc == ZERO_ACCELERATION

    @pytest.mark.parametrize("make", ALL_CPU_STRATEGIES)
    def test_never_chooses_collision_when_safe_exists(self, make, corridor):
        strategy = make()
        resolver = MovementResolver(corridor)
        for position, velocity in [((0, 0), (0, 0)), ((3, 0), (1, 0)), ((5, 0), (2, 0))]:
            acc = strategy.choose_acceleration(view(position, velocity), corridor, [])
            assert not resolver.resolve(position, velocity, acc).is_collision

    def test_finish_seeking_moves_forward(self, corridor):
        """Test the finish-seeker steps toward the finish from rest."""
        acc = FinishSeekingStrategy().choose_acceleration(view((0, 0)), corridor, [])
        assert acc == Acceleration(1, 0)

    def test_finish_seeking_takes_finish(self):
        """Test a finish-crossing candidate is taken immediately."""
        track = Track.from_rows(["+    -"])
        car = view((3, 0), velocity=(2, 0))
        acc = FinishSeekingStrategy().choose_acceleration(car, track, [])
        outcome = MovementResolver(track).resolve(car.position, car.velocity, acc)
        assert isinstance(outcome, FinishCrossed)
        assert acc == Acceleration(0, 0)

    def test_finish_seeking_avoids_traps(self):
        """Test lookahead rejects a landing with no safe follow-up."""
        track = Track.from_rows([
            "+   *-",
            "      ",
        ])
        strategy = FinishSeekingStrategy()
        car = view((1, 0), velocity=(1, 0))
        acc = strategy.choose_acceleration(car, track, [])
        resolver = MovementResolver(track)
        landing = resolver.resolve(car.position, car.velocity, acc)
        assert isinstance(landing, Legal)
        follow_ups = [
            resolver.resolve(landing.position, landing.velocity, a)
            for a in Acceleration.choices()
        ]
        assert any(not o.is_collision for o in follow_ups)

    def test_weighted_prefers_finish(self):
        track = Track.from_rows(["+    -"])
        car = view((3, 0), velocity=(2, 0))
        acc = WeightedStrategy().choose_acceleration(car, track, [])
        outcome = MovementResolver(track).resolve(car.position, car.velocity, acc)
        assert isinstance(outcome, FinishCrossed)

    def test_weighted_clearance(self):
        """Test wall clearance along the four axes."""
        track = Track.from_rows([
            "*****",
            "*   *",
            "*   *",
            "*   *",
            "*****",
        ])
        assert WeightedStrategy.clearance(track, (2, 2)) == 2
        assert WeightedStrategy.clearance(track, (1, 1)) == 1

    def test_weighted_penalizes_standing_still(self, corridor):
        strategy = WeightedStrategy()
        here = 9.0
        moving = strategy.score_move(corridor, (0, 0), here, Legal((1, 0), (1, 0)))
        still = strategy.score_move(corridor, (0, 0), here, Legal((0, 0), (0, 0)))
        assert still < moving

    def test_weighted_stay_factor_scales_whole_score(self, corridor):
        """Test a stay-in-place landing has its full score scaled."""
        still = Legal((0, 0), (0, 0))
        plain = WeightedStrategy(WeightedStrategyConfig(stay_in_place_factor=1.0))
        halved = WeightedStrategy()
        unscaled = plain.score_move(corridor, (0, 0), 9.0, still)
        assert halved.score_move(corridor, (0, 0), 9.0, still) == pytest.approx(0.5 * unscaled)

    def test_random_is_seeded(self, corridor):
        """Test equal seeds give equal choices."""
        car = view((4, 0), velocity=(1, 0))
        first = [RandomStrategy(seed=5).choose_acceleration(car, corridor, []) for _ in range(3)]
        a, b = RandomStrategy(seed=5), RandomStrategy(seed=5)
        seq_a = [a.choose_acceleration(car, corridor, []) for _ in range(10)]
        seq_b = [b.choose_acceleration(car, corridor, []) for _ in range(10)]
        assert seq_a == seq_b
        assert len(set(first)) == 1

    def test_acceleration_for_uses_context(self, box):
        """Test the MoveProvider entry point delegates to the strategy."""
        context = RaceContext(track=box, other_cars=(), round_number=1)
        acc = FinishSeekingStrategy().acceleration_for(view((1, 1)), context)
        assert acc == ZERO_ACCELERATION


class TestHumanInput:
    """Test the human input adapter."""

    @pytest.mark.parametrize("text,expected", [
        ("1 0", Acceleration(1, 0)),
        ("-1,1", Acceleration(-1, 1)),
        ("  0 , -1 ", Acceleration(0, -1)),
        ("+1 +1", Acceleration(1, 1)),
    ])
    def test_parse(self, text, expected):
        assert parse_acceleration(text) == expected

    @pytest.mark.parametrize("text", ["", "1", "a b", "1 0 0", "2 0", "0 -3"])
    def test_parse_invalid(self, text):
        with pytest.raises(InvalidAccelerationError):
            parse_acceleration(text)

    def test_provider_prompts(self, corridor):
        prompts = []

        def read_line(prompt):
            prompts.append(prompt)
            return "1 0"

        provider = HumanMoveProvider(read_line)
        context = RaceContext(track=corridor, other_cars=(), round_number=2)
        assert provider.acceleration_for(view((0, 0)), context) == Acceleration(1, 0)
        assert "round 2" in prompts[0]
        assert "(0, 0)" in prompts[0]


class TestFactory:
    """Test strategy construction."""

    def test_create_by_name(self):
        assert isinstance(create_strategy("finish"), FinishSeekingStrategy)
        assert isinstance(create_strategy("weighted", seed=1), WeightedStrategy)
        assert isinstance(create_strategy("random", seed=1), RandomStrategy)

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            create_strategy("teleport")

    def test_select_alternates(self):
        """Test seats alternate between finish-seeking and weighted."""
        assert isinstance(select_strategy(0), FinishSeekingStrategy)
        assert isinstance(select_strategy(1), WeightedStrategy)
        assert isinstance(select_strategy(2), FinishSeekingStrategy)
