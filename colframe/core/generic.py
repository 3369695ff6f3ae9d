import abc
from functools import update_wrapper


# To enforce the implementation of these methods such that convention is maintained.
# Note: inherit from this AFTER any other class that might implement desired default behavior.
class ColframeCommon(abc.ABC):
    @property
    @abc.abstractmethod
    def values(self):
        """The internal data representation."""
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def empty(self):
        """Check whether the data structure is empty.

        Returns
        -------
        bool

        """
        raise NotImplementedError

    @abc.abstractmethod
    def __len__(self):
        raise NotImplementedError

    @abc.abstractmethod
    def __repr__(self):
        # short repr without any data
        raise NotImplementedError

    @abc.abstractmethod
    def __str__(self):
        # representation including data
        raise NotImplementedError

    @abc.abstractmethod
    def copy(self):
        """Return an independent copy of the same type."""
        raise NotImplementedError


class BinaryOps(abc.ABC):
    @abc.abstractmethod
    def _comparison(self, other, comparison):
        raise NotImplementedError

    def __lt__(self, other):
        return self._comparison(other, '<')

    def __le__(self, other):
        return self._comparison(other, '<=')

    def __eq__(self, other):
        return self._comparison(other, '==')

    def __ne__(self, other):
        return self._comparison(other, '!=')

    def __ge__(self, other):
        return self._comparison(other, '>=')

    def __gt__(self, other):
        return self._comparison(other, '>')


class ArithmeticOps(abc.ABC):
    @abc.abstractmethod
    def _element_wise_operation(self, other, operation):
        raise NotImplementedError

    @abc.abstractmethod
    def _in_place_operation(self, other, operation):
        raise NotImplementedError

    def __add__(self, other):
        return self._element_wise_operation(other, '+')

    def __sub__(self, other):
        return self._element_wise_operation(other, '-')

    def __mul__(self, other):
        return self._element_wise_operation(other, '*')

    def __truediv__(self, other):
        return self._element_wise_operation(other, '/')

    def __iadd__(self, other):
        return self._in_place_operation(other, '+')

    def __isub__(self, other):
        return self._in_place_operation(other, '-')

    def __imul__(self, other):
        return self._in_place_operation(other, '*')

    def __itruediv__(self, other):
        return self._in_place_operation(other, '/')


class BitOps(abc.ABC):
    @abc.abstractmethod
    def _bitwise_operation(self, other, operation):
        raise NotImplementedError

    def __and__(self, other):
        return self._bitwise_operation(other, '&')

    def __or__(self, other):
        return self._bitwise_operation(other, '|')


class numeric_only(object):
    """Method available only on objects whose `kind` is numeric.

    Accessing it on any other object raises AttributeError, hence `hasattr` reports False,
    the same as if the method was never defined.
    """
    def __init__(self, func):
        self.func = func
        update_wrapper(self, func)

    def __get__(self, instance, owner):
        if instance is None:
            return self

        if not instance.kind.is_numeric:
            raise AttributeError('{} is not available for dtype {}'.format(self.func.__name__, instance.kind))

        return self.func.__get__(instance, owner)
