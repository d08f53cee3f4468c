import sys

from injector import Injector

from analysis import load_analysis_results
from bitbucket_client import ClientModule
from config import ConfigModule
from errors import DecoratorError
from insights import InsightsReporter
from logger import LoggingModule
from pull_request_decorator import PullRequestDecorator


def main(argv=None) -> None:
	import argparse
	import logging

	parser = argparse.ArgumentParser(
		prog="PR Decorator",
		description="Decorate a Bitbucket Server pull request with the results of a static analysis.",
	)
	parser.add_argument(
		'--config_source',
		type=str,
		required=True,
		help="(required) Path or URL of the configuration file.",
	)
	parser.add_argument(
		'--log_level',
		type=str,
		default='INFO',
		help="Log level until the configuration is loaded. `log_level` in the configuration takes over after that.",
		choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
	)
	parser.add_argument(
		'--no_colors',
		action='store_true',
		help="Do not color log messages.",
	)
	parser.add_argument(
		'analysis',
		help="(required) Path to the analysis results (JSON or YAML)."
	)

	args = parser.parse_args(argv)
	config_source: str = args.config_source

	inj = Injector([
		ConfigModule(config_source),
		LoggingModule(args.log_level, use_colors=not args.no_colors),
		ClientModule,
	])
	logger = inj.get(logging.Logger)
	try:
		results = load_analysis_results(args.analysis)
		decorator = inj.get(PullRequestDecorator)
		decorator.decorate(results)
		inj.get(InsightsReporter).publish(results)
	except DecoratorError:
		logger.exception("Decorating the pull request from '%s' failed.", args.analysis)
		sys.exit(1)


if __name__ == '__main__':
	main()
