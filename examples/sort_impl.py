import argparse

from sortset.dataset import Dataset
from sortset.kinds import kind_names


def insertion_sort(a):
    for i in range(1, len(a)):
        key = a[i]
        j = i - 1
        while j >= 0 and a[j] > key:
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = key


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--n", type=int, required=True)
    p.add_argument("--kind", type=str, required=True, choices=kind_names())
    p.add_argument("--impl", type=str, default="builtin", choices=["builtin", "insertion"])
    args = p.parse_args()
    data = Dataset(args.n, args.kind)
    if args.impl == "insertion":
        insertion_sort(data.view())
        out = data.to_list()
    else:
        out = sorted(data)
    # print small digest to avoid optimization removal
    print(out[0], out[-1])


if __name__ == "__main__":
    main()
