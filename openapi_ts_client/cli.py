import argparse
import glob
import os
import sys
from typing import List, Tuple

from openapi_ts_client.config import CONFIG_FILE_NAME, OpenApiConfig
from openapi_ts_client.generator import ApiClientGenerator, save_project
from openapi_ts_client.internal.errors import GenerationError
from openapi_ts_client.internal.parser.openapi import load_document
from openapi_ts_client.internal.types.models import Project


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def find_client_packages() -> List[Tuple[str, OpenApiConfig]]:
    """Поиск клиент-пакетов по openapi.toml файлам"""
    packages = []

    # Поиск всех openapi.toml файлов рекурсивно
    for config_file in glob.glob(f"**/{CONFIG_FILE_NAME}", recursive=True):
        config_dir = os.path.dirname(config_file) or "."
        config = OpenApiConfig.from_file(config_file)

        if config and config.url:
            packages.append((config_dir, config))

    return packages


def _generate_client_core(config: OpenApiConfig) -> Project:
    """Ядро генерации клиента - только генерация без сохранения"""
    if not config.url:
        raise ValueError("URL не указан в конфигурации")

    print(f"🚀 Генерация клиента из {config.url}")
    print("📥 Загрузка OpenAPI спецификации...")
    openapi_spec = load_document(config.url)

    print("⚙️ Генерация кода...")
    generator = ApiClientGenerator(
        openapi_spec, source_url=config.url, policy=config.policy()
    )
    return generator.generate()


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")
    save_project(project, target_path)

    print("✅ Генерация завершена успешно!")
    print(f"📦 Клиент создан в: {os.path.abspath(target_path)}")


def _generate_client(config: OpenApiConfig, work_dir: str) -> str:
    """Генерация клиента в новую директорию"""
    if not config.dirname:
        raise ValueError("Директория не указана в конфигурации")

    project = _generate_client_core(config)
    work_path = os.path.join(work_dir, config.dirname)
    _save_project_files(project, work_path)
    return work_path


def _generate_client_in_existing(config: OpenApiConfig, existing_package_dir: str):
    """Генерация клиента в существующую директорию пакета"""
    project = _generate_client_core(config)
    _save_project_files(project, existing_package_dir)


def regenerate_all(force: bool = False):
    """Обновление всех найденных клиент-пакетов"""
    print("🔍 Поиск клиент-пакетов...")
    packages = find_client_packages()

    if not packages:
        print("❌ Клиент-пакеты не найдены")
        return

    print(f"✅ Найдено {len(packages)} клиент-пакетов:")
    for config_dir, config in packages:
        print(f"   {config_dir} ({config.url})")

    if not force and not confirm_choice("Обновить все?"):
        return

    for config_dir, config in packages:
        print(f"\n📍 Пакет: {config_dir}")
        _generate_client_in_existing(config, config_dir)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript клиента из OpenAPI"
    )
    parser.add_argument("--url", type=str, help="URL или путь к OpenAPI спецификации")
    parser.add_argument("--dirname", type=str, help="Директория для генерации клиента")
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Генерировать без подтверждения"
    )
    parser.add_argument(
        "--all", action="store_true", help="Обновить все найденные клиент-пакеты"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Пропускать операции без тегов вместо ошибки",
    )
    parser.add_argument(
        "--body-required-by-presence",
        action="store_true",
        help="Тело запроса обязательно, если requestBody объявлен",
    )
    parser.add_argument(
        "--type-aliases",
        action="store_true",
        help="Объявлять в models.ts типы для необъектных схем",
    )
    parser.add_argument(
        "--multiline-models",
        action="store_true",
        help="Многострочные интерфейсы в models.ts",
    )
    return parser


def generate(argv=None):
    """Универсальная команда генерации OpenAPI клиента"""
    args = build_parser().parse_args(argv)

    # Инициализация конфига
    if args.init_config:
        config = OpenApiConfig(dirname=args.dirname or "api").merge_with_args(args)
        config.save_to_file()
        print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
        return

    try:
        if args.all:
            regenerate_all(force=args.force)
            return

        # Загрузка конфига из файла
        file_config = OpenApiConfig.from_file(search_dir=args.dirname)

        if file_config:
            print(f"📋 Используется конфиг из {CONFIG_FILE_NAME}")
            final_config = file_config.merge_with_args(args)
        elif args.url:
            final_config = OpenApiConfig(dirname="api").merge_with_args(args)
        else:
            # Нет ни конфига ни URL
            print("❌ Ошибка: Укажите URL или создайте конфиг с --init-config")
            sys.exit(1)

        if not final_config.url:
            print("❌ Ошибка: URL не указан ни в конфиге, ни в аргументах")
            sys.exit(1)

        # Конфиг найден в указанной директории - генерируем прямо в нее
        if args.dirname and file_config:
            print(f"📁 Генерация в существующую папку: {args.dirname}")
            _generate_client_in_existing(final_config, args.dirname)
            return

        work_path = os.path.join(".", final_config.dirname)
        if (
            os.path.isdir(work_path)
            and os.listdir(work_path)
            and not args.force
            and not confirm_choice(f"Папка {work_path} не пуста. Перезаписать файлы?")
        ):
            return

        print(f"📁 Генерация в папку: {final_config.dirname}")
        work_path = _generate_client(final_config, ".")

        if not file_config and (
            args.force or confirm_choice(f"Сохранить настройки в {CONFIG_FILE_NAME}?")
        ):
            config_path = os.path.join(work_path, CONFIG_FILE_NAME)
            final_config.save_to_file(config_path)
            print(f"💾 Конфиг сохранен в {config_path}")

    except (GenerationError, OSError, ValueError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()
