from ..constants import float_fraction
from ..util import WeakRdgNamespace

DEFAULTS = WeakRdgNamespace()
"""
- :term:`baseP`
- :term:`nearCognatePenalty`
- :term:`distanceD0`
- :term:`gcBonus`
- :term:`reinitiationBase`
- :term:`lengthL0`
- :term:`spacingS0`
- :term:`gc_window`
- :term:`translon_limit`
"""
DEFAULTS.add(
    'baseP', 0.9, cast_type=float_fraction,
    defn='base initiation probability for an AUG in an ideal context')
DEFAULTS.add(
    'nearCognatePenalty', 0.5, cast_type=float_fraction,
    defn='multiplier applied to the initiation probability of near-cognate start codons')
DEFAULTS.add(
    'distanceD0', 40.0,
    defn='distance decay constant (nt) used only for ranking start codons by proximity to the 5\' end')
DEFAULTS.add(
    'gcBonus', 0.3,
    defn='scaling of the initiation bonus given for downstream GC fraction above 0.5')
DEFAULTS.add(
    'reinitiationBase', 0.3, cast_type=float_fraction,
    defn='base probability that a ribosome terminating an ORF resumes scanning and reinitiates')
DEFAULTS.add(
    'lengthL0', 100.0,
    defn='ORF length decay constant (nt) for reinitiation. Longer ORFs reinitiate less often')
DEFAULTS.add(
    'spacingS0', 50.0,
    defn='intercistronic spacing constant (nt) for reinitiation. Larger spacing allows reinitiation')
DEFAULTS.add(
    'gc_window', 30,
    defn='size of the window (nt) downstream of the start codon used to compute the GC content')
DEFAULTS.add(
    'translon_limit', 12,
    defn='the default maximum number of translons to report')


class ModelParameters:
    """
    holds the parameters of the initiation, reinitiation and flux model. A new object is created for
    each set of overrides so the defaults and caller-owned parameters are never modified

    Example:
        >>> params = ModelParameters(baseP=0.8)
        >>> params.baseP, params.gcBonus
        (0.8, 0.3)
    """

    def __init__(self, **kwargs):
        inputs = {}
        inputs.update(DEFAULTS.items())
        inputs.update(kwargs)
        for arg, val in inputs.items():
            if arg not in DEFAULTS:
                raise KeyError('unrecognized argument', arg)
            setattr(self, arg, val)

    def items(self):
        return [(k, getattr(self, k)) for k in DEFAULTS.keys()]

    def to_dict(self):
        return dict(self.items())

    def copy(self, **kwargs):
        """
        returns a new parameters object with the current values updated by any keyword arguments
        """
        inputs = self.to_dict()
        inputs.update(kwargs)
        return ModelParameters(**inputs)

    def __eq__(self, other):
        if not isinstance(other, ModelParameters):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(['{}={}'.format(k, repr(v)) for k, v in self.items()]))

    @classmethod
    def resolve(cls, params=None):
        """
        convert the params input accepted throughout the engine to a ModelParameters object

        Args:
            params (ModelParameters or dict or None): parameter object, mapping of overrides, or None for defaults
        """
        if params is None:
            return cls()
        elif isinstance(params, ModelParameters):
            return params
        return cls(**dict(params))
