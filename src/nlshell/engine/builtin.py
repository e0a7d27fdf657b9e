"""Built-in intent and template library.

Every built-in intent has a template of the same name. ``create_matcher`` and
``create_engine`` build fresh instances; nothing here is shared global state.
"""

from __future__ import annotations

from nlshell.engine.template_engine import TemplateEngine
from nlshell.models.entity import CustomEntity, FileTypeEntity, NumberEntity, PathEntity
from nlshell.models.intent import Intent, IntentDomain
from nlshell.models.plan import Template
from nlshell.parser.intent_matcher import FuzzyConfig, IntentMatcher

_CWD = PathEntity(value=".")
_ANY_EXT = FileTypeEntity(value="*")


def _file_ops() -> list[Intent]:
    return [
        Intent(
            name="count_python_lines",
            domain=IntentDomain.FILE_OPS,
            keywords=["python", "行数", "统计", "代码"],
            patterns=[r"(?i)统计.*python.*行数"],
            entities={"path": _CWD},
        ),
        Intent(
            name="count_files",
            domain=IntentDomain.FILE_OPS,
            keywords=["统计", "文件", "数量", "个数"],
            patterns=[r"(?i)统计.*文件.*(数量|个数)"],
            entities={"path": _CWD, "ext": _ANY_EXT},
        ),
        Intent(
            name="find_files_by_size",
            domain=IntentDomain.FILE_OPS,
            keywords=[
                "查找", "显示", "大文件", "小文件", "文件",
                "大于", "小于", "体积", "最大", "最小",
            ],
            patterns=[
                r"(?i)(查找|显示|列出).*(大文件|大于|小文件|小于)",
                r"(?i)(体积|大小).*(最大|最小|大于|小于)",
                r"(?i)(最大|最小).*(文件|file)",
                r"(?i)(largest|biggest|smallest).*files?",
            ],
            entities={
                "path": _CWD,
                "ext": _ANY_EXT,
                "limit": NumberEntity(value=10),
                "sort_order": CustomEntity(type_name="sort", value="-hr"),
            },
            # Above list_directory so filtering intents win.
            confidence_threshold=0.7,
        ),
        Intent(
            name="find_recent_files",
            domain=IntentDomain.FILE_OPS,
            keywords=["查找", "显示", "列出", "最近", "最新", "修改", "更新", "文件"],
            patterns=[
                r"(?i)(查找|显示|列出).*(最近|最新)",
                r"(?i)(最近|最新).*(修改|更新|变更).*文件",
                r"(?i)文件.*(最近|最新)",
                r"(?i)(recent|latest|newest).*files?",
            ],
            entities={"path": _CWD, "ext": _ANY_EXT, "limit": NumberEntity(value=10)},
            confidence_threshold=0.65,
        ),
        Intent(
            name="find_files_by_name",
            domain=IntentDomain.FILE_OPS,
            keywords=["查找", "搜索", "寻找", "文件", "名字", "名称", "find"],
            patterns=[
                r"(?i)(查找|搜索|寻找).*(文件|file).*名(字|称)",
                r"(?i)(find|locate).*(file|name)",
                r"(?i)名(字|称).*为.*的.*文件",
            ],
            entities={"path": _CWD},
            confidence_threshold=0.6,
        ),
        Intent(
            name="list_directory",
            domain=IntentDomain.FILE_OPS,
            keywords=["查看", "列出", "目录", "文件", "ls"],
            patterns=[
                r"(?i)(查看|列出).*(目录|文件夹|当前)",
                r"(?i)(ls|list).*(dir|directory|files?)",
                r"(?i)^ls\s*$",
            ],
            entities={"path": _CWD},
        ),
        Intent(
            name="create_directory",
            domain=IntentDomain.FILE_OPS,
            keywords=["创建", "新建", "建立", "目录", "文件夹", "mkdir"],
            patterns=[
                r"(?i)(创建|新建|建立).*(目录|文件夹|folder)",
                r"(?i)mkdir.*dir",
            ],
            entities={"path": PathEntity(value="")},
            confidence_threshold=0.65,
        ),
        Intent(
            name="create_symlink",
            domain=IntentDomain.FILE_OPS,
            keywords=["创建", "建立", "符号链接", "软链接", "链接", "ln"],
            patterns=[
                r"(?i)(创建|建立).*(符号链接|软链接|symlink)",
                r"(?i)ln.*-s",
            ],
            entities={"source": PathEntity(value=""), "target": PathEntity(value="")},
            confidence_threshold=0.65,
        ),
    ]


def _data_ops() -> list[Intent]:
    return [
        Intent(
            name="grep_pattern",
            domain=IntentDomain.DATA_OPS,
            keywords=["搜索", "grep", "查找", "匹配"],
            patterns=[r"(?i)(搜索|查找).*模式"],
        ),
        Intent(
            name="sort_lines",
            domain=IntentDomain.DATA_OPS,
            keywords=["排序", "sort", "排列"],
            patterns=[r"(?i)排序.*文本"],
        ),
        Intent(
            name="count_pattern",
            domain=IntentDomain.DATA_OPS,
            keywords=["统计", "次数", "出现", "模式"],
            patterns=[r"(?i)统计.*(次数|出现)"],
        ),
        Intent(
            name="count_file_stats",
            domain=IntentDomain.DATA_OPS,
            keywords=["统计", "计算", "行数", "字数", "单词", "wc"],
            patterns=[
                r"(?i)统计.*(行数|字数|单词)",
                r"(?i)(行数|字数|单词).*统计",
                r"(?i)wc.*file",
            ],
            entities={"file": PathEntity(value="")},
            confidence_threshold=0.6,
        ),
        Intent(
            name="compare_files",
            domain=IntentDomain.DATA_OPS,
            keywords=["比较", "对比", "差异", "不同", "diff"],
            patterns=[
                r"(?i)比较.*(文件|file)",
                r"(?i)(差异|不同|区别)",
                r"(?i)diff.*file",
            ],
            entities={"file1": PathEntity(value=""), "file2": PathEntity(value="")},
            confidence_threshold=0.6,
        ),
    ]


def _diagnostic_ops() -> list[Intent]:
    return [
        Intent(
            name="analyze_errors",
            domain=IntentDomain.DIAGNOSTIC_OPS,
            keywords=["分析", "错误", "error", "日志"],
            patterns=[r"(?i)分析.*错误"],
        ),
        Intent(
            name="check_disk_usage",
            domain=IntentDomain.DIAGNOSTIC_OPS,
            keywords=["检查", "磁盘", "空间", "使用"],
            patterns=[r"(?i)检查.*磁盘", r"(?i)disk\s+usage"],
            entities={"path": _CWD, "limit": NumberEntity(value=10)},
        ),
        Intent(
            name="view_system_logs",
            domain=IntentDomain.DIAGNOSTIC_OPS,
            keywords=["日志", "log", "查看", "系统", "错误"],
            patterns=[
                r"(?i)(查看|显示).*(日志|log)",
                r"(?i)(系统|system).*(日志|log|错误)",
            ],
            entities={"lines": NumberEntity(value=50)},
            confidence_threshold=0.6,
        ),
    ]


def _system_ops() -> list[Intent]:
    return [
        Intent(
            name="list_processes",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["列出", "进程", "ps", "process"],
            patterns=[r"(?i)列出.*进程"],
        ),
        Intent(
            name="check_memory_usage",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["检查", "查看", "内存", "memory", "RAM", "可用"],
            patterns=[
                r"(?i)(检查|查看).*(内存|memory|ram)",
                r"(?i)内存.*(使用|情况|可用)",
            ],
            confidence_threshold=0.6,
        ),
        Intent(
            name="check_cpu_usage",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["检查", "查看", "CPU", "使用率", "负载"],
            patterns=[
                r"(?i)(检查|查看).*(CPU|负载|load)",
                r"(?i)CPU.*(使用|占用|情况)",
            ],
            confidence_threshold=0.6,
        ),
        Intent(
            name="check_network_connections",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["网络", "连接", "端口", "监听", "netstat"],
            patterns=[
                r"(?i)(检查|查看).*(网络|连接|端口)",
                r"(?i)(netstat|lsof|socket).*(端口|port|listen)",
            ],
            confidence_threshold=0.6,
        ),
        Intent(
            name="check_uptime",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["运行时长", "启动时间", "uptime", "多久", "开机"],
            patterns=[
                r"(?i)(系统|机器).*(运行|启动|开机).*(时间|多久)",
                r"(?i)(uptime|运行时长|开机时间)",
            ],
            confidence_threshold=0.55,
        ),
        Intent(
            name="ping_host",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["ping", "测试", "检测", "网络", "连通", "可达"],
            patterns=[
                r"(?i)ping.*host",
                r"(?i)测试.*(网络|连通)",
                r"(?i)(检测|测试).*(可达|连接)",
            ],
            entities={"count": NumberEntity(value=4)},
            confidence_threshold=0.65,
        ),
        Intent(
            name="view_env_var",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["查看", "显示", "环境变量", "变量", "env", "echo"],
            patterns=[
                r"(?i)(查看|显示).*(环境变量|变量)",
                r"(?i)env.*var",
                r"(?i)echo.*\$",
            ],
            confidence_threshold=0.6,
        ),
        Intent(
            name="check_service_status",
            domain=IntentDomain.SYSTEM_OPS,
            keywords=["查看", "检查", "服务", "状态", "运行", "service"],
            patterns=[
                r"(?i)(查看|检查).*(服务|service)",
                r"(?i)服务.*状态",
                r"(?i)systemctl.*status",
            ],
            confidence_threshold=0.6,
        ),
    ]


def _templates() -> list[Template]:
    return [
        # file ops
        Template(
            name="count_python_lines",
            template="find {path} -name '*.py' -type f -exec wc -l {} + | tail -1",
            variables=["path"],
            description="Total line count of Python files under a directory",
        ),
        Template(
            name="count_files",
            template="find {path} -name '*.{ext}' -type f | wc -l",
            variables=["path", "ext"],
            description="Number of files of a given type under a directory",
        ),
        Template(
            name="find_files_by_size",
            template=(
                "find {path} -name '*.{ext}' -type f -exec ls -lh {} + "
                "| sort -k5 {sort_order} | head -n {limit}"
            ),
            variables=["path", "ext", "sort_order", "limit"],
            description="Largest or smallest files, optionally filtered by type",
        ),
        Template(
            name="find_recent_files",
            template="find {path} -name '*.{ext}' -type f -exec ls -lt {} + | head -n {limit}",
            variables=["path", "ext", "limit"],
            description="Most recently modified files",
        ),
        Template(
            name="find_files_by_name",
            template="find {path} -name '{name}' -type f",
            variables=["path", "name"],
            description="Find files by name under a directory",
        ),
        Template(
            name="list_directory",
            template="ls -lh {path}",
            variables=["path"],
            description="List files and subdirectories",
        ),
        Template(
            name="create_directory",
            template="mkdir -p {path}",
            variables=["path"],
            description="Create a directory, including parents",
        ),
        Template(
            name="create_symlink",
            template="ln -s {source} {target}",
            variables=["source", "target"],
            description="Create a symbolic link",
        ),
        # data ops
        Template(
            name="grep_pattern",
            template="grep -r '{pattern}' {path}",
            variables=["pattern", "path"],
            description="Recursively search for a text pattern",
        ),
        Template(
            name="sort_lines",
            template="sort {file}",
            variables=["file"],
            description="Sort the lines of a file",
        ),
        Template(
            name="count_pattern",
            template="grep -c '{pattern}' {file}",
            variables=["pattern", "file"],
            description="Count lines of a file matching a pattern",
        ),
        Template(
            name="count_file_stats",
            template="wc {file}",
            variables=["file"],
            description="Line, word and byte counts of a file",
        ),
        Template(
            name="compare_files",
            template="diff -u {file1} {file2}",
            variables=["file1", "file2"],
            description="Unified diff of two files",
        ),
        # diagnostic ops
        Template(
            name="analyze_errors",
            template="grep -i 'error' {file} | sort | uniq -c | sort -nr",
            variables=["file"],
            description="Count distinct error lines in a log file",
        ),
        Template(
            name="check_disk_usage",
            template="du -sh {path}/* | sort -hr | head -n {limit}",
            variables=["path", "limit"],
            description="Top N entries by disk usage",
        ),
        Template(
            name="view_system_logs",
            template="journalctl -p err --since '1 hour ago' --no-pager | tail -n {lines}",
            variables=["lines"],
            description="Recent error entries from the system journal",
        ),
        # system ops
        Template(
            name="list_processes",
            template="ps aux | grep '{name}' | grep -v grep",
            variables=["name"],
            description="Processes whose command line contains a name",
        ),
        Template(
            name="check_memory_usage",
            template="free -h",
            description="Memory usage summary",
        ),
        Template(
            name="check_cpu_usage",
            template="uptime && top -bn1 | head -n 15",
            description="Load average and CPU usage",
        ),
        Template(
            name="check_network_connections",
            template="ss -tuln | head -n 20",
            description="Listening network ports",
        ),
        Template(
            name="check_uptime",
            template="uptime",
            description="System uptime",
        ),
        Template(
            name="ping_host",
            template="ping -c {count} {host}",
            variables=["host", "count"],
            description="Test connectivity to a host",
        ),
        Template(
            name="view_env_var",
            template="echo ${var}",
            variables=["var"],
            description="Print an environment variable",
        ),
        Template(
            name="check_service_status",
            template="systemctl status {service}",
            variables=["service"],
            description="Status of a systemd service",
        ),
    ]


class BuiltinIntents:
    def all_intents(self) -> list[Intent]:
        return [*_file_ops(), *_data_ops(), *_diagnostic_ops(), *_system_ops()]

    def all_templates(self) -> list[Template]:
        return _templates()

    def create_matcher(
        self, cache_capacity: int = 100, fuzzy_config: FuzzyConfig | None = None
    ) -> IntentMatcher:
        matcher = IntentMatcher(cache_capacity=cache_capacity, fuzzy_config=fuzzy_config)
        for intent in self.all_intents():
            matcher.register(intent)
        return matcher

    def create_engine(self) -> TemplateEngine:
        engine = TemplateEngine()
        for template in self.all_templates():
            engine.register(template)
        return engine
