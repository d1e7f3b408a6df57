"""当前版本解析

优先级: tag > branch > version。tag 是最精确的标识，branch 次之，
裸 version 字符串作为最后的后备。
"""

from __future__ import annotations

from checkver.core.exceptions import MissingVersionError
from checkver.core.models import Component


def resolve_current_version(component: Component) -> str:
    """返回组件在清单中声明的当前版本

    Raises:
        MissingVersionError: tag / branch / version 均未填写
    """
    for value in (component.tag, component.branch, component.version):
        if value:
            return value
    raise MissingVersionError(f"组件 {component.name} 未声明 tag / branch / version")
