from avlmap.demo import run_demo

run_demo()
