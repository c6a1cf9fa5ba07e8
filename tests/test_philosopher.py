import io

from philosim.args import Settings
from philosim.clock import Clock
from philosim.philosopher import Action, Philosopher, Table, pick_loser


def make_table(philosophers=3, die=1000, eat=1, sleep=1, meals=None):
    out = io.StringIO()
    settings = Settings(philosophers, die, eat, sleep, meals)
    return Table(settings, Clock(), out), out


def lines(out):
    return out.getvalue().splitlines()


def test_action_texts():
    table, out = make_table()
    p = Philosopher(table, 0)
    assert p.report(Action.FORK) is True
    assert p.report(Action.EAT) is True
    assert p.report(Action.SLEEP) is True
    assert p.report(Action.THINK) is True
    texts = [line.split(" ", 2)[2] for line in lines(out)]
    assert texts == [
        "has taken a fork",
        "is eating",
        "is sleeping",
        "is thinking",
    ]


def test_announce_death_only_once():
    table, out = make_table()
    first = Philosopher(table, 0)
    second = Philosopher(table, 1)
    assert table.announce_death(first, 12.5) is True
    assert table.dead is True
    assert lines(out) == ["12.500000 1 died"]
    assert table.announce_death(second, 13.0) is False
    assert lines(out) == ["12.500000 1 died"]


def test_report_after_death_prints_nothing():
    table, out = make_table()
    p = Philosopher(table, 1)
    table.announce_death(Philosopher(table, 0), 1.0)
    assert p.report(Action.THINK) is False
    assert len(lines(out)) == 1


def test_report_eat_records_meal():
    table, out = make_table()
    p = Philosopher(table, 1)
    assert p.first_pass is True
    assert p.report(Action.EAT) is True
    assert p.first_pass is False
    assert p.last_meal_ms >= 0.0
    assert lines(out)[-1].endswith(" 2 is eating")


def test_should_die_first_pass():
    table, _ = make_table(die=100)
    p = Philosopher(table, 0)
    assert p.should_die(100) is False
    assert p.should_die(100.5) is True


def test_should_die_after_meal():
    table, _ = make_table(die=100)
    p = Philosopher(table, 0)
    p.first_pass = False
    p.last_meal_ms = 50.0
    assert p.should_die(150.0) is False
    assert p.should_die(150.9) is False
    assert p.should_die(151.5) is True


def test_fork_assignment():
    table, _ = make_table(philosophers=3)
    first = Philosopher(table, 0)
    last = Philosopher(table, 2)
    assert first.right_fork is table.forks[1]
    assert first.left_fork is table.forks[0]
    assert last.right_fork is table.forks[2]
    assert last.left_fork is table.forks[0]


def test_pick_loser_prefers_earliest_meal():
    table, _ = make_table(die=100)
    ps = [Philosopher(table, i) for i in range(3)]
    for p, meal in zip(ps, (40.0, 10.0, 20.0)):
        p.first_pass = False
        p.last_meal_ms = meal
    assert pick_loser(ps, 300.0) is ps[1]


def test_pick_loser_skips_done_and_healthy():
    table, _ = make_table(die=100)
    ps = [Philosopher(table, i) for i in range(2)]
    ps[0].done = True
    ps[1].first_pass = False
    ps[1].last_meal_ms = 250.0
    assert pick_loser(ps, 300.0) is None


def test_pick_loser_first_pass_starved():
    table, _ = make_table(die=100)
    ps = [Philosopher(table, i) for i in range(2)]
    ps[0].first_pass = False
    ps[0].last_meal_ms = 0.0
    assert pick_loser(ps, 200.0) is ps[1]
    ps[0].last_meal_ms = 150.0
    assert pick_loser(ps, 200.0) is ps[1]


def test_cycle_order_and_forks_released():
    table, out = make_table(philosophers=2, meals=2)
    p = Philosopher(table, 0)
    assert p.cycle() is True
    assert p.meals_left == 1
    texts = [line.split(" ", 2)[2] for line in lines(out)]
    assert texts == [
        Action.THINK.value,
        Action.FORK.value,
        Action.FORK.value,
        Action.EAT.value,
        Action.SLEEP.value,
    ]
    for fork in table.forks:
        assert fork.acquire(blocking=False)
        fork.release()


def test_run_eats_required_meals():
    table, out = make_table(philosophers=2, meals=3)
    p = Philosopher(table, 1)
    p.run()
    assert p.done is True
    assert p.meals_left == 0
    assert sum(line.endswith("is eating") for line in lines(out)) == 3


def test_single_philosopher_dies():
    table, out = make_table(philosophers=1, die=20, eat=10, sleep=10)
    p = Philosopher(table, 0)
    assert p.cycle() is False
    assert table.dead is True
    assert lines(out)[-1].endswith(" 1 died")
    assert table.forks[0].acquire(blocking=False)


def test_report_when_starved_announces_death():
    table, out = make_table(die=1)
    p = Philosopher(table, 0)
    table.clock.sleep_ms(3)
    assert p.report(Action.THINK) is False
    assert table.dead is True
    assert lines(out)[-1].endswith(" 1 died")