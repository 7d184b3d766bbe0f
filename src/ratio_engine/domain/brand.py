"""
Brand — непрозрачный идентификатор актива

Brand сравнивается по identity, а не по label: два brand с одинаковым label
различны. Label используется только для отображения.
"""


class Brand:
    """
    Непрозрачный identity-токен одного вида актива/величины.

    Не имеет мутаторов. Копирование (copy/deepcopy, model_copy у pydantic
    моделей) возвращает тот же объект, поэтому identity не теряется.
    """

    __slots__ = ("_label",)

    def __init__(self, label: str) -> None:
        if not isinstance(label, str) or not label:
            raise ValueError(f"Brand label must be a non-empty string, got {label!r}")
        self._label = label

    @property
    def label(self) -> str:
        return self._label

    def __copy__(self) -> "Brand":
        return self

    def __deepcopy__(self, memo: dict) -> "Brand":
        return self

    def __repr__(self) -> str:
        return f"<Brand {self._label}>"
