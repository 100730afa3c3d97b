"""
Composable parsers that thread a matched text and a built value through a chain of steps.

See the objects for more explanations.

Defining parsers:
```
digits = many(1, const.UNBOUNDED, single_char(str.isdigit))
number = digits % (lambda value, matched: int(matched))
parens = "(" / number * ")"    # value is the number, matched text is "42)"
```

Using parsers:
```
result = run(number, new_state("42 apples", None))
if result.ok:
    ... # `result.value` is 42, `result.unconsumed` is " apples"
else:
    ... # soft failure
```

Signals (`ParseSignal` subclasses) raised by `throw_on_success()`, `throw_on_failure()` and
`throw_anyway()` propagate out of `run()` unless intercepted by `catch()`.
"""

import chainparse.const as const
import chainparse.main
from chainparse.state import (
    ParseState,
    new_state,
)
from chainparse.main import (
    Parser,
    Chain,
    Link,
    Alternative,
    Forward,
    Lookahead,
    convert_parameter,
    run,
    parse,
    step,
    literal,
    anycase,
    succeed,
    fail,
    test,
    build,
    single_char,
    char_while,
    char_until,
    everything,
    end_of_input,
    many,
    optional,
    absorb,
    morph,
    repeat_while,
    repeat_until,
    force,
    snapshot,
    no_consume,
    no_build,
    make_reluctant,
    make_greedy,
    make_oblivious,
)
from chainparse.signals import (
    ParseSignal,
    throw_on_success,
    throw_on_failure,
    throw_anyway,
    catch,
)
