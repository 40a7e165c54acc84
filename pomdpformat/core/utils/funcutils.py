import inspect, functools
import numpy as np

def cached_property(fn):
    '''
    Used to decorate a function that should be a @property
    but also be computed only once per object.

    Unlike functools.cached_property, this keeps the semantics of @property:
    the attribute cannot be assigned to, which matters for the read-only
    name spaces and models built by the readers.
    '''
    spec = inspect.getfullargspec(fn)
    assert spec.args == ['self']
    assert spec.varargs is None and spec.varkw is None

    key = '_cached_'+fn.__name__
    @property
    @functools.wraps(fn)
    def wrapped(self):
        try:
            return self.__dict__[key]
        except KeyError:
            pass
        value = fn(self)
        self.__dict__[key] = value
        return value
    return wrapped

def readonly(array) -> np.ndarray:
    '''
    Returns a float copy of `array` with numpy's write flag cleared.
    '''
    array = np.array(array, dtype=float)
    array.setflags(write=False)
    return array
