import multiprocessing as mp

from partstat.cli import interface

if __name__ == "__main__":
    mp.freeze_support()
    interface()
