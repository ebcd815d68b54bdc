"""
Python types that are not exposed as builtins, and the objects that should only ever be compared with 'is'
"""

import functools
import types
import weakref


GeneratorType = types.GeneratorType
DictKeysType = type({}.keys())
DictValuesType = type({}.values())
FunctionTypes = (types.FunctionType, types.LambdaType, types.MethodType, types.BuiltinFunctionType,
    types.BuiltinMethodType, functools.partial)
ReferenceType = weakref.ReferenceType

SingletonObjects = (None, Ellipsis, NotImplemented)

# Objects of these types never hold fields, even though some of them have a __dict__
NonStructTypes = (type, types.ModuleType, int, float, complex, bool, bytes, bytearray, memoryview, range, set,
    frozenset, GeneratorType, DictKeysType, DictValuesType)
