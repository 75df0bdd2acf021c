from __future__ import annotations

import random

import pytest

from shooting_stars.path_store import EMPTY_PATH, PathReleaseError, PathStore


def test_empty_path_is_referenceless():
    store = PathStore()
    empty = store.empty()
    assert empty is EMPTY_PATH is None
    assert store.to_moves(empty) == ()
    assert store.retain(empty) is None
    store.release(empty)
    assert store.live == 0
    assert store.allocated == 0


def test_extend_shares_the_existing_chain():
    store = PathStore()
    first = store.extend(store.empty(), 1)
    second = store.extend(first, 2)

    assert second.rest is first
    assert first.references == 2
    assert second.references == 1
    assert store.to_moves(second) == (1, 2)
    assert store.to_moves(first) == (1,)
    assert store.length(second) == 2
    assert store.live == 2


def test_release_cascades_only_through_unshared_nodes():
    store = PathStore()
    first = store.extend(None, 1)
    second = store.extend(first, 2)

    store.release(first)
    assert store.live == 2
    assert first.references == 1

    store.release(second)
    assert store.live == 0
    assert first.retired and second.retired


def test_sibling_release_keeps_the_shared_tail():
    store = PathStore()
    tail = store.extend(None, 9)
    parent = store.extend(tail, 2)
    store.release(tail)
    left = store.extend(parent, 1)
    right = store.extend(parent, 5)
    store.release(parent)

    assert parent.references == 2
    store.release(left)

    assert store.live == 3
    assert parent.references == 1
    assert store.to_moves(right) == (9, 2, 5)

    store.release(right)
    assert store.live == 0


def test_retain_adds_an_owner():
    store = PathStore()
    node = store.extend(None, 4)
    assert store.retain(node) is node
    store.release(node)
    assert store.to_moves(node) == (4,)
    store.release(node)
    assert store.live == 0


def test_retired_nodes_cannot_be_used():
    store = PathStore()
    node = store.extend(None, 3)
    store.release(node)

    with pytest.raises(PathReleaseError):
        store.release(node)
    with pytest.raises(PathReleaseError):
        store.retain(node)
    with pytest.raises(PathReleaseError):
        store.extend(node, 1)
    with pytest.raises(PathReleaseError):
        store.to_moves(node)


def test_to_moves_does_not_consume_the_path():
    store = PathStore()
    path = None
    for move in (5, 2, 1):
        child = store.extend(path, move)
        store.release(path)
        path = child

    assert store.to_moves(path) == (5, 2, 1)
    assert store.to_moves(path) == (5, 2, 1)
    assert store.live == 3


@pytest.mark.parametrize("seed", range(8))
def test_random_balanced_operations_leave_nothing_alive(seed):
    rng = random.Random(seed)
    store = PathStore()
    owned = []
    extends = 0

    for _ in range(400):
        action = rng.random()
        if action < 0.45 or not owned:
            parent = rng.choice(owned) if owned and rng.random() < 0.8 else None
            owned.append(store.extend(parent, rng.randint(1, 9)))
            extends += 1
        elif action < 0.6:
            owned.append(store.retain(rng.choice(owned)))
        else:
            store.release(owned.pop(rng.randrange(len(owned))))

        for path in owned:
            store.to_moves(path)

    while owned:
        store.release(owned.pop())

    assert store.allocated == extends
    assert store.live == 0
