"""Populate a small map and print what the tree looks like."""

import time

from avlmap.config import demo_items
from avlmap.tree import AVLMap


def run_demo() -> AVLMap:
    print("--- AVLMap demo ---")
    items = demo_items()
    mymap = AVLMap(check_invariants=True)

    start_time = time.time()
    for key, value in items:
        mymap.insert(key, value)
    end_time = time.time()

    print(f"Inserted {len(mymap)} entries in {end_time - start_time:.6f}s, height={mymap.height()}")
    for key, value in mymap.begin():
        print(f"  - {key}: {value}")

    if len(mymap) > 2:
        victim = list(mymap)[len(mymap) // 2]
        mymap.delete(victim)
        print(f"After delete({victim}): keys={list(mymap)}, height={mymap.height()}")
    return mymap


if __name__ == "__main__":
    run_demo()
