from .activations import ActivationFunction, get_activation
from .costs import CostFunction, get_cost
from .dataset import Dataset, Instance
from .exceptions import (DatasetInitializationError, DimensionMismatchError,
                         NetworkInitializationError, NoLabelError)
from .gradients import ParameterGradients
from .network import Network

__version__ = "0.1.0"
