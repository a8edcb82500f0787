"""submitdeps - 作业提交依赖解析

将 groupId:artifactId:version 坐标解析为本地 jar 路径列表，供提交工具追加到 classpath。
"""

__version__ = "0.3.0"
