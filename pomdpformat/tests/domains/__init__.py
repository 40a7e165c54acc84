import textwrap

# Cassandra's tiger problem
TIGER = """
# The tiger problem
discount: 0.95
values: reward
states: tiger-left tiger-right
actions: listen open-left open-right
observations: tiger-left tiger-right

T: listen
identity

T: open-left
uniform

T: open-right
uniform

O: listen
0.85 0.15
0.15 0.85

O: open-left
uniform

O: open-right
uniform

R: listen : * : * : * -1

R: open-left : tiger-left : * : * -100

R: open-left : tiger-right : * : * 10

R: open-right : tiger-left : * : * 10

R: open-right : tiger-right : * : * -100
"""

# Two states, two actions, one observation
STAY_OR_MOVE = """
discount: 0.9
states: 2
actions: stay move
observations: 1

T: stay
identity

T: move
uniform

O: stay : * : 0 1.0
O: move : * : 0 1.0

R: stay : * : * : * 1
R: move : 0 : * : * -2.5
R: move : 1 : * : * 3
"""

# Header only; tables are appended by the tests
THREE_STATES = """
discount: 0.5
states: a b c
actions: go wait
observations: beep silence
"""

TIGER_ALPHA = """
0
19.0 19.0

0
-81.5975 3.01448

1
3.01448 -81.5975

2
28.4025 -81.5975

2
-81.5975 28.4025
"""

def write_text(tmp_path, text, name="model.pomdp"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(text).lstrip("\n"))
    return str(path)
