# Containers handed out by a compiled expression
# Any attempt to mutate them after construction raises TypeError


class FrozenList(list):
    def _immutable(self, *args, **kws):
        raise TypeError("cannot change compiled expression - object is immutable")

    __setitem__ = _immutable
    __delitem__ = _immutable
    __iadd__ = _immutable
    __imul__ = _immutable
    pop = _immutable
    remove = _immutable
    append = _immutable
    clear = _immutable
    extend = _immutable
    insert = _immutable
    reverse = _immutable
    sort = _immutable

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return f"FrozenList({list.__repr__(self)})"


class FrozenDict(dict):
    def _immutable(self, *args, **kws):
        raise TypeError("cannot change compiled expression - object is immutable")

    __setitem__ = _immutable
    __delitem__ = _immutable
    __ior__ = _immutable
    clear = _immutable
    pop = _immutable
    popitem = _immutable
    setdefault = _immutable
    update = _immutable

    def __hash__(self):
        return hash(tuple(self.items()))

    def __repr__(self):
        return f"FrozenDict({dict.__repr__(self)})"
