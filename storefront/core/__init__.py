"""基础设施：数据库、仓储、工作单元、会话存储、异常与日志"""
