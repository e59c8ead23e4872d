"""
TypeNameLint - 类型命名前缀检查工具

Usage:
    typenamelint MANIFEST [MANIFEST ...] [options]

Options:
    --config PATH          配置文件路径 (默认: .typenamelint.yaml)
    --json-output          输出 JSON 格式
    --fail-on LEVEL        导致失败的最低级别: low|medium|high|critical
    --no-parallel          串行检查
    --verbose              详细输出
"""
import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

import yaml

from .core.config import ConfigError, ConfigLoader, LintConfig
from .core.metadata import ManifestError, TypeDescriptor, load_manifest
from .core.reporter import Reporter, Severity
from .core.rule_engine import RuleEngine
from .lib.logger import LogContext, cleanup_old_logs, get_logger

DEFAULT_CONFIG_NAMES = (".typenamelint.yaml", ".typenamelint.yml")

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE_ERROR = 2


class TypeNameLint:
    """TypeNameLint 主类"""

    def __init__(self, args: argparse.Namespace):
        self.args = args
        self.config: Optional[LintConfig] = None
        self.logger = get_logger("typenamelint", verbose=args.verbose)
        self.reporter = Reporter()
        self.start_time = time.time()

    def run(self) -> int:
        """执行检查，返回退出码"""
        removed = cleanup_old_logs()
        self.logger.log_separator("TypeNameLint Session Start")
        if removed:
            self.logger.debug(f"Removed {removed} expired log files")
        self.logger.debug(f"Arguments: {vars(self.args)}")

        try:
            with LogContext(self.logger, "config_loading"):
                self._load_config()

            with LogContext(self.logger, "manifest_loading"):
                types = self._load_types()
        except (ConfigError, ManifestError, OSError, yaml.YAMLError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_USAGE_ERROR

        self.logger.log_list("Types to check", [t.full_name for t in types])
        if self.args.verbose:
            print(f"Checking {len(types)} type(s)...", file=sys.stderr)

        with LogContext(self.logger, "rules_check"):
            engine = self._build_engine()
            findings = engine.check_types(types, excluded=self.config.excluded_types)
            self.reporter.add_findings(findings)

        elapsed = time.time() - self.start_time
        self.logger.info(f"Total findings: {len(self.reporter.findings)}")
        self.logger.info(f"Elapsed time: {elapsed:.2f}s")
        self.logger.log_separator("TypeNameLint Session End")

        if self.args.json_output:
            self.reporter.deduplicate()
            self.reporter.sort()
            print(self.reporter.to_json())
            exit_code = EXIT_FINDINGS if self.reporter.has_failures(self.config.fail_on) else EXIT_OK
        else:
            exit_code = self.reporter.report(fail_on=self.config.fail_on)
            if self.args.verbose:
                self.reporter.print_summary()

        return exit_code if self.config.fail_on_findings else EXIT_OK

    def _load_config(self):
        """加载配置文件"""
        config_path = self.args.config

        # 如果没有指定配置文件，尝试默认位置
        if not config_path:
            for name in DEFAULT_CONFIG_NAMES:
                candidate = Path.cwd() / name
                if candidate.exists():
                    config_path = str(candidate)
                    self.logger.debug(f"Found config file: {config_path}")
                    break
        elif not os.path.exists(config_path):
            raise ConfigError(f"Config file not found: {config_path}")

        if config_path:
            self.logger.info(f"Loading config from: {config_path}")
        else:
            self.logger.info("No config file found, using defaults")

        self.config = ConfigLoader(config_path).load()

        # 命令行参数覆盖配置
        if self.args.fail_on:
            self.config.fail_on = Severity.parse(self.args.fail_on)
            self.logger.debug(f"fail_on overridden to: {self.config.fail_on.value}")
        if self.args.no_parallel:
            self.config.performance.parallel = False

    def _load_types(self) -> List[TypeDescriptor]:
        """加载所有清单中的类型（保持文件与声明顺序）"""
        types = []
        for manifest in self.args.manifests:
            types.extend(load_manifest(manifest))
        return types

    def _build_engine(self) -> RuleEngine:
        engine = RuleEngine(parallel=self.config.performance.parallel,
                            max_workers=self.config.performance.max_workers)
        engine.load_builtin_rules(self.config.rules)
        if self.config.custom_rules_path:
            engine.load_custom_rules(self.config.custom_rules_path)
        return engine


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        prog="typenamelint",
        description="Check type, interface and generic parameter names for correct prefixes"
    )
    parser.add_argument("manifests", nargs="+", metavar="MANIFEST",
                        help="类型清单文件 (YAML/JSON)")
    parser.add_argument("--config", help="配置文件路径 (默认: .typenamelint.yaml)")
    parser.add_argument("--json-output", action="store_true", help="输出 JSON 格式")
    parser.add_argument("--fail-on", choices=[s.value for s in Severity],
                        help="导致失败的最低严重级别")
    parser.add_argument("--no-parallel", action="store_true", help="串行检查")
    parser.add_argument("--verbose", "-v", action="store_true", help="详细输出")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    return TypeNameLint(parse_args(argv)).run()


if __name__ == "__main__":
    sys.exit(main())
