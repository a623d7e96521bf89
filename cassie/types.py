from typing import Mapping

# Binding table: single character symbols to the values they take
VariableValues = Mapping[str, float]
