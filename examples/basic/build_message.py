"""Build a message piecewise, then copy and release it."""

from dynstr import DynStr

d = DynStr()
d.append("id=%d", 7).check()
d.prepend("prefix-").check()

copy = DynStr()
copy.dup(d).check()
print(copy)  # prefix-id=7

d.free()
copy.free()
