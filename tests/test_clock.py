from philosim.clock import Clock


def test_elapsed_starts_near_zero_and_grows():
    clock = Clock()
    first = clock.elapsed_ms()
    second = clock.elapsed_ms()
    assert first >= 0.0
    assert second >= first


def test_sleep_waits_at_least_amount():
    clock = Clock()
    before = clock.elapsed_ms()
    clock.sleep_ms(5)
    assert clock.elapsed_ms() - before >= 5


def test_sleep_zero_returns_promptly():
    clock = Clock()
    before = clock.elapsed_ms()
    clock.sleep_ms(0)
    assert clock.elapsed_ms() - before < 50


def test_clocks_are_independent():
    older = Clock()
    older.sleep_ms(3)
    newer = Clock()
    assert older.elapsed_ms() > newer.elapsed_ms()