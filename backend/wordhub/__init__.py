"""
WordHub：剑桥、牛津高阶和韦氏词典查询服务
"""

__version__ = "2.0.0"
