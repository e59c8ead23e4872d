"""
Metadata Module - 类型元数据描述与清单加载

类型清单（manifest）是编译产物元数据的文本导出，格式为 YAML（JSON 亦可）:

    assembly: Phones.dll
    types:
      - name: CPhone
        namespace: Acme.Phones
        interface: false
        generic_parameters: [TMechanism]
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import yaml

from ..lib.logger import get_logger


# 标记编译器/工具生成代码的特性
GENERATED_CODE_ATTRIBUTES = (
    "System.Runtime.CompilerServices.CompilerGeneratedAttribute",
    "System.CodeDom.Compiler.GeneratedCodeAttribute",
)

# 编译器合成类型名中才会出现的字符，如 <>c__DisplayClass1
GENERATED_NAME_MARKERS = ("<", "$")


class ManifestError(ValueError):
    """类型清单格式错误"""


@dataclass(frozen=True)
class GenericParameterDescriptor:
    """泛型参数描述"""
    name: str


@dataclass(frozen=True)
class TypeDescriptor:
    """类型/接口声明描述（检查期间只读）"""
    name: str
    is_interface: bool = False
    is_compiler_generated: bool = False
    generic_parameters: Tuple[GenericParameterDescriptor, ...] = field(default_factory=tuple)
    namespace: str = ""

    @property
    def full_name(self) -> str:
        """带命名空间的完整名称（仅用于展示）"""
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


def is_generated_code(name: str, attributes: Iterable[str] = (), explicit: Optional[bool] = None) -> bool:
    """
    判断类型是否为编译器生成代码

    Args:
        name: 类型名
        attributes: 类型上的特性全名或简单名
        explicit: 清单中显式声明的值，优先于推断
    Returns:
        是否为生成代码
    """
    if explicit is not None:
        return bool(explicit)

    simple_names = {a.rsplit(".", 1)[-1] for a in GENERATED_CODE_ATTRIBUTES}
    for attribute in attributes:
        if attribute in GENERATED_CODE_ATTRIBUTES or attribute in simple_names:
            return True

    return any(marker in name for marker in GENERATED_NAME_MARKERS)


def _parse_generic_parameter(raw: Any, type_name: str) -> GenericParameterDescriptor:
    if isinstance(raw, dict):
        raw = raw.get("name")
    if not isinstance(raw, str) or not raw:
        raise ManifestError(f"Type '{type_name}': generic parameter must be a non-empty string, got {raw!r}")
    return GenericParameterDescriptor(raw)


def _optional_bool(record: dict, key: str, type_name: str) -> Optional[bool]:
    value = record.get(key)
    if value is not None and not isinstance(value, bool):
        raise ManifestError(f"Type '{type_name}': '{key}' must be true or false, got {value!r}")
    return value


def _parse_type(record: Any, index: int) -> TypeDescriptor:
    if not isinstance(record, dict):
        raise ManifestError(f"Type entry #{index} must be a mapping, got {type(record).__name__}")

    name = record.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"Type entry #{index} is missing a non-empty 'name'")

    namespace = record.get("namespace") or ""
    if not isinstance(namespace, str):
        raise ManifestError(f"Type '{name}': 'namespace' must be a string")

    attributes = record.get("attributes") or []
    if not isinstance(attributes, list) or not all(isinstance(a, str) for a in attributes):
        raise ManifestError(f"Type '{name}': 'attributes' must be a list of strings")

    raw_parameters = record.get("generic_parameters") or []
    if not isinstance(raw_parameters, list):
        raise ManifestError(f"Type '{name}': 'generic_parameters' must be a list")

    return TypeDescriptor(
        name=name,
        namespace=namespace,
        is_interface=bool(_optional_bool(record, "interface", name)),
        is_compiler_generated=is_generated_code(name, attributes,
                                                _optional_bool(record, "compiler_generated", name)),
        generic_parameters=tuple(_parse_generic_parameter(p, name) for p in raw_parameters),
    )


def types_from_records(records: Iterable[Any]) -> List[TypeDescriptor]:
    """将已解析的类型记录转换为 TypeDescriptor（保持顺序）"""
    return [_parse_type(record, i) for i, record in enumerate(records)]


def load_manifest(path: str) -> List[TypeDescriptor]:
    """
    加载类型清单

    Args:
        path: 清单文件路径（YAML 或 JSON）
    Returns:
        按声明顺序排列的类型列表
    Raises:
        FileNotFoundError: 文件不存在
        ManifestError: 清单格式错误
    """
    logger = get_logger("typenamelint")
    manifest_path = Path(path)
    logger.debug(f"Loading manifest from: {manifest_path}")

    with open(manifest_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path}: manifest root must be a mapping")

    records = data.get("types") or []
    if not isinstance(records, list):
        raise ManifestError(f"{manifest_path}: 'types' must be a list")

    types = types_from_records(records)
    logger.info(f"Loaded {len(types)} types from {manifest_path.name}"
                + (f" (assembly: {data['assembly']})" if data.get("assembly") else ""))
    return types
