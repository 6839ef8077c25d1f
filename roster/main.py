# roster/main.py
"""Главный модуль, реализующий консольный интерфейс (CLI) для управления студентами."""
import argparse
import logging
import sys
import traceback

from . import errors, processing
from .config import setup_logging, storage_path_from_env
from .store import StudentStore

logger = logging.getLogger(__name__)


def print_menu():
    """Выводит на экран главное меню."""
    print("\n" + "="*30)
    print("      МЕНЮ УПРАВЛЕНИЯ")
    print("="*30)
    print("1. Показать всех студентов")
    print("2. Добавить нового студента")
    print("3. Изменить студента")
    print("4. Удалить студента по ID")
    print("5. Обновить список из файла")
    print("6. Импорт из CSV")
    print("7. Экспорт в CSV")
    print("8. Сортировать и показать список")
    print("9. Показать путь к файлу хранилища")
    print("0. Выход")
    print("="*30)


def _ask_path(prompt: str) -> str:
    return input(prompt).strip().strip('"').strip("'")


def show_students(students):
    if not students:
        print("ℹ️ Список студентов пуст.")
        return
    print("\n--- Список всех студентов ---")
    for s in students:
        print(s)


def add_flow(store: StudentStore):
    stud_id = input("Введите ID нового студента: ")
    name = input("Введите ФИО студента: ")
    age = input("Введите возраст: ")
    course = input("Введите курс: ")
    student = processing.build_student(stud_id, name, age, course)
    processing.ensure_unique_id(store, student.id)
    store.add(student)
    print(f"✅ Студент {student.name} успешно добавлен.")


def edit_flow(store: StudentStore):
    stud_id = processing.parse_int(input("Введите ID студента для изменения: "), "ID")
    current = processing.ensure_existing_id(store, stud_id)
    print(f"Текущие данные: {current}")
    name = input(f"Имя [{current.name}]: ")
    age = input(f"Возраст [{current.age}]: ")
    course = input(f"Курс [{current.course}]: ")
    updated = processing.apply_edits(current, name, age, course)
    store.update(updated)
    print(f"✅ Данные студента {updated.name} обновлены.")


def delete_flow(store: StudentStore):
    stud_id = processing.parse_int(input("Введите ID студента для удаления: "), "ID")
    processing.ensure_existing_id(store, stud_id)
    confirm = input(f"Удалить студента с ID {stud_id}? (y/n): ").strip().lower()
    if confirm not in ('y', 'yes', 'д', 'да'):
        print("Удаление отменено.")
        return
    store.delete(stud_id)
    print(f"✅ Студент с ID {stud_id} успешно удален.")


def import_flow(store: StudentStore):
    filepath = _ask_path("Введите путь к файлу для импорта: ")
    mode = input("Режим: [m] слияние или [o] перезапись? ").strip().lower()
    if mode not in ('m', 'o'):
        raise errors.DataValidationError("Режим импорта должен быть 'm' или 'o'.")
    summary = store.import_csv(filepath, merge=(mode == 'm'))
    print(f"✅ Импортировано {summary.imported} записей "
          f"(добавлено: {summary.added}, заменено: {summary.replaced}).")
    if summary.skipped_lines:
        print(f"⚠️ Пропущены некорректные строки: {', '.join(map(str, summary.skipped_lines))}")


def export_flow(store: StudentStore):
    filepath = _ask_path("Введите путь к файлу для экспорта: ")
    store.export_csv(filepath)
    print(f"✅ Данные успешно экспортированы в {filepath}.")


def main_cli(store: StudentStore):
    """Основной цикл консольного приложения."""
    actions = {
        '2': add_flow,
        '3': edit_flow,
        '4': delete_flow,
        '6': import_flow,
        '7': export_flow,
    }

    while True:
        print_menu()
        choice = input("Выберите пункт меню: ").strip()

        try:
            if choice == '1':
                show_students(store.get_all())

            elif choice in actions:
                actions[choice](store)

            elif choice == '5':
                count = store.load()
                print(f"✅ Загружено {count} студентов.")
                if store.skipped_lines:
                    print(f"⚠️ Пропущены некорректные строки: {', '.join(map(str, store.skipped_lines))}")

            elif choice == '8':
                sort_key = input("Введите ключ сортировки (id, name, age, course): ").strip().lower()
                try:
                    sorted_list = processing.sort_students(store.get_all(), sort_key)
                except ValueError as ve:
                    print(f"❌ Ошибка сортировки: {ve}")
                else:
                    print(f"\n--- Студенты, отсортированные по '{sort_key}' ---")
                    for s in sorted_list:
                        print(s)

            elif choice == '9':
                print(f"Файл хранилища: {store.storage_file_path()}")

            elif choice == '0':
                print("👋 До свидания!")
                break

            else:
                print("❌ Неверный выбор. Пожалуйста, введите число от 0 до 9.")

        except errors.DataValidationError as e:
            print(f"❌ Ошибка данных: {e}")
        except errors.StudentAppError as e:
            print(f"❌ Ошибка: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roster", description="Учёт студентов в CSV-файле.")
    parser.add_argument("--storage", default=None,
                        help="Файл хранилища (относительный путь — от домашнего каталога).")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Уровень логирования.")
    return parser


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    store = StudentStore(args.storage or storage_path_from_env())
    logger.info("Файл хранилища: %s", store.storage_file_path())
    try:
        main_cli(store)
    except (KeyboardInterrupt, EOFError):
        print("\nПрограмма принудительно остановлена.")
    except Exception:
        print("\n!!! КРИТИЧЕСКАЯ ОШИБКА !!!")
        traceback.print_exc()
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(run())
