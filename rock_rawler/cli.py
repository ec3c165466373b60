#!/usr/bin/env python3
"""
Точка входа RockRawler для командной строки.

Читает seed URL построчно из stdin, обходит каждый сайт по очереди и печатает
найденные URL (ссылки, скрипты, action форм) в stdout, по одному в строке.

Опции:
  -t INT              Число потоков (default: 5)
  -d INT              Глубина обхода (default: 2)
  -insecure           Отключить проверку TLS
  -subs               Включить поддомены в scope
  -h TEXT             Заголовки через ';;', напр. "Cookie: foo=bar;;Referer: http://example.com/"
  --timeout SEC       Таймаут одного запроса (секунд)
  --config, -c PATH   YAML/JSON-файл со значениями по умолчанию
  --log-level LEVEL   Уровень логирования (логи идут в stderr)
  --log-file PATH     Дополнительный файл для логов
  --version, -v       Показать версию RockRawler

Пример:
  cat urls.txt | rockrawler -t 10 -d 3 -subs
"""
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from rock_rawler import __version__
from rock_rawler.config import load_settings
from rock_rawler.engine import crawl
from rock_rawler.logger import init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

NO_INPUT_HINT = "No urls detected. Hint: cat urls.txt | rockrawler"


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def stdin_is_interactive() -> bool:
    """True when nothing is piped or redirected into stdin."""
    stream = click.get_text_stream('stdin')
    return stream.isatty()


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='RockRawler, version %(version)s')
@click.option('-t', 'threads', type=int, default=None, help='Number of threads to utilise.  [default: 5]')
@click.option('-d', 'depth', type=int, default=None, help='Depth to crawl.  [default: 2]')
@click.option('-insecure', 'insecure', is_flag=True, help='Disable TLS verification.')
@click.option('-subs', 'subs', is_flag=True, help='Include subdomains for crawling.')
@click.option(
    '-h', 'raw_headers',
    default=None,
    help='Custom headers separated by two semi-colons. '
         'E.g. -h "Cookie: foo=bar;;Referer: http://example.com/"'
)
@click.option('--timeout', 'timeout', type=float, default=None, help='Per-request timeout in seconds.')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к YAML/JSON-файлу с настройками по умолчанию.'
)
@click.option(
    '--log-level', 'log_level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования  [default: WARNING]'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Файл для логов (только stderr, если не указан)'
)
def cli(
    threads: Optional[int],
    depth: Optional[int],
    insecure: bool,
    subs: bool,
    raw_headers: Optional[str],
    timeout: Optional[float],
    config_path: Optional[Path],
    log_level: Optional[str],
    log_file: Optional[Path],
):
    """Crawl every URL read from stdin and print the links, scripts and form actions found."""
    try:
        settings = load_settings(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    init_logging(level=log_level or settings.log_level, log_file=log_file)

    if stdin_is_interactive():
        print_error(NO_INPUT_HINT)

    for line in click.get_text_stream('stdin'):
        seed = line.strip()
        if not seed:
            continue
        try:
            request = settings.request_for(
                seed,
                threads=threads,
                max_depth=depth,
                include_subdomains=subs or None,
                skip_tls_verify=insecure or None,
                raw_headers=raw_headers,
                timeout=timeout,
            )
        except ValidationError as e:
            print_error(f'Неверные параметры: {e}')
        for url in crawl(request):
            click.echo(url)


def main():
    cli()


if __name__ == "__main__":
    main()
