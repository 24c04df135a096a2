from hypothesis import given, settings, strategies as st

from arcgrid.image import Image, Point
from arcgrid.sizes import cheat_size, solve_single, solve_size


def test_cheat_size_lists_train_then_test():
    train = [(Image(0, 0, 1, 1), Image(0, 0, 2, 3)), (Image(0, 0, 1, 1), Image(0, 0, 4, 5))]
    test_out = Image(0, 0, 6, 7)
    assert cheat_size(test_out, train) == [Point(2, 3), Point(4, 5), Point(6, 7)]


def test_solve_single_constant_without_seeds():
    ans, score = solve_single([], [3, 3])
    assert ans == [3, 3, 3]
    assert score < 0


def test_solve_single_follows_seed():
    ans, _ = solve_single([[2, 4, 6]], [4, 8])
    assert ans[:-1] == [4, 8]
    assert 1 <= ans[-1] <= 30


def test_solve_single_length():
    ans, _ = solve_single([[1, 2, 3, 4]], [5, 6, 7])
    assert len(ans) == 4


def test_solve_size_identity_seed():
    seeds = [[Point(2, 3), Point(4, 5), Point(6, 7)]]
    target = [Point(2, 3), Point(4, 5)]
    assert solve_size(seeds, target) == Point(6, 7)


def test_solve_size_constant_without_seeds():
    target = [Point(5, 5), Point(5, 5)]
    assert solve_size([], target) == Point(5, 5)


@settings(max_examples=15, deadline=None)
@given(
    st.lists(
        st.lists(st.builds(Point, st.integers(0, 12), st.integers(0, 12)),
                 min_size=3, max_size=3),
        max_size=2,
    ),
    st.lists(st.builds(Point, st.integers(1, 30), st.integers(1, 30)),
             min_size=2, max_size=2),
)
def test_solve_size_result_in_range(seeds, target):
    result = solve_size(seeds, target)
    assert 1 <= result.x <= 30
    assert 1 <= result.y <= 30