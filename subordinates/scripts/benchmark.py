"""
Time Finder.get_subordinates on generated role trees. Run from project root:
  python -m subordinates.scripts.benchmark [--sizes 100 200 400] [--repeat 20] [--seed 1]

Shapes:
  tree    random unbalanced binary tree of roles, users on random roles (average case)
  chain   roles form a linked list; first user at the head, all others at the tail (worst case)
  single  one role shared by every user
"""
import argparse
import random
import sys
import time
from collections.abc import Callable

from subordinates.schemas.hierarchy import ROOT_PARENT_ID, Role, User
from subordinates.services.finder import Finder

DEFAULT_SIZES = (100, 200, 400, 800, 1600)


def generate_role_tree(count: int, rng: random.Random) -> list[Role]:
    """
    Random unbalanced binary tree: roles get random ids and are inserted in order, each one
    becoming the child of the node where a binary-search-tree insert would place it.
    """
    # node id -> [left child id, right child id]
    children: dict[int, list[int | None]] = {}
    root_id: int | None = None
    roles: list[Role] = []
    used: set[int] = set()
    for _ in range(count):
        role_id = rng.randint(1, 2**62)
        while role_id in used:
            role_id = rng.randint(1, 2**62)
        used.add(role_id)

        parent_id = ROOT_PARENT_ID
        if root_id is None:
            root_id = role_id
        else:
            node = root_id
            while True:
                side = 0 if role_id < node else 1
                child = children[node][side]
                if child is None:
                    children[node][side] = role_id
                    parent_id = node
                    break
                node = child
        children[role_id] = [None, None]
        roles.append(Role(id=role_id, name=f"Test role {role_id}", parent=parent_id))
    return roles


def generate_role_chain(count: int) -> list[Role]:
    """Roles 1..count where role i's parent is i-1 (role 1 is the root)."""
    return [
        Role(id=i, name=f"Test role {i}", parent=i - 1)
        for i in range(1, count + 1)
    ]


def generate_users(count: int, role_ids: list[int], rng: random.Random) -> list[User]:
    """Users 1..count, each on a random role from role_ids."""
    return [
        User(id=i, name=f"Test user {i}", role=rng.choice(role_ids))
        for i in range(1, count + 1)
    ]


def _time_query(finder: Finder, user_id: int, repeat: int) -> float:
    """Mean seconds per get_subordinates call over repeat runs."""
    start = time.perf_counter()
    for _ in range(repeat):
        finder.get_subordinates(user_id)
    return (time.perf_counter() - start) / repeat


def _report(shape: str, role_count: int, user_count: int, seconds: float) -> None:
    print(f"{shape:<6} roles={role_count:<6} users={user_count:<6} {seconds * 1e6:10.1f} us/op")


def bench_tree(sizes: list[int], repeat: int, rng: random.Random) -> None:
    for role_count in sizes:
        roles = generate_role_tree(role_count, rng)
        role_ids = [r.id for r in roles]
        for user_count in sizes:
            users = generate_users(user_count, role_ids, rng)
            finder = Finder()
            finder.load_roles(roles)
            finder.load_users(users)
            _report("tree", role_count, user_count, _time_query(finder, users[0].id, repeat))


def bench_chain(sizes: list[int], repeat: int, rng: random.Random) -> None:
    for role_count in sizes:
        roles = generate_role_chain(role_count)
        for user_count in sizes:
            users = [
                User(id=i, name=f"Test user {i}", role=roles[-1].id)
                for i in range(1, user_count + 1)
            ]
            users[0] = users[0].model_copy(update={"role": roles[0].id})
            finder = Finder()
            finder.load_roles(roles)
            finder.load_users(users)
            _report("chain", role_count, user_count, _time_query(finder, users[0].id, repeat))


def bench_single(sizes: list[int], repeat: int, rng: random.Random) -> None:
    roles = [Role(id=1, name="Test role 1")]
    for user_count in sizes:
        users = generate_users(user_count, [1], rng)
        finder = Finder()
        finder.load_roles(roles)
        finder.load_users(users)
        _report("single", 1, user_count, _time_query(finder, users[0].id, repeat))


SHAPES: dict[str, Callable[[list[int], int, random.Random], None]] = {
    "tree": bench_tree,
    "chain": bench_chain,
    "single": bench_single,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark subordinate queries.")
    parser.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_SIZES))
    parser.add_argument("--repeat", type=int, default=20, help="Queries per measurement")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: time-based)")
    parser.add_argument("--shape", choices=sorted(SHAPES), action="append", dest="shapes")
    args = parser.parse_args(argv)

    if args.repeat < 1 or any(s < 1 for s in args.sizes):
        print("--repeat and --sizes must be positive.", file=sys.stderr)
        return 1

    rng = random.Random(args.seed)
    for shape in args.shapes or list(SHAPES):
        SHAPES[shape](args.sizes, args.repeat, rng)
    return 0


if __name__ == "__main__":
    sys.exit(main())
