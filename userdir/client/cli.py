"""
Terminal front end: renders the derived view as a text table and drives the
create/edit form and the delete confirmation.

    userdir list --search ann --sort email --desc --page 0 --page-size 10
    userdir create --full-name "Ann Lee" --email ann@example.com --phone 555 --role admin
    userdir update 3 --position Manager
    userdir delete 3
"""
import argparse
import sys
from typing import Callable, List, Optional

from userdir.client.api_client import ApiError, UserApiClient
from userdir.client.controller import UserListController
from userdir.client.view import ViewResult
from userdir.helpers.enums import SortDirection, SortField, UserRole

COLUMNS = (
    ('ID', lambda user: str(user.id)),
    ('Full name', lambda user: user.full_name),
    ('Email', lambda user: user.email),
    ('Phone', lambda user: user.phone),
    ('Role', lambda user: 'Administrator' if user.role == UserRole.ADMIN else 'User'),
    ('Active', lambda user: 'yes' if user.is_active else 'no'),
)

FORM_OPTIONS = (
    ('full_name', 'fullName'),
    ('email', 'email'),
    ('phone', 'phone'),
    ('birth_date', 'birthDate'),
    ('role', 'role'),
    ('position', 'position'),
)


def render_table(result: ViewResult) -> str:
    rows = [[render(user) for _, render in COLUMNS] for user in result.data]
    widths = [max([len(title)] + [len(row[i]) for row in rows]) for i, (title, _) in enumerate(COLUMNS)]
    lines = [
        '  '.join(title.ljust(width) for (title, _), width in zip(COLUMNS, widths)),
        '  '.join('-' * width for width in widths),
    ]
    lines.extend('  '.join(cell.ljust(width) for cell, width in zip(row, widths)) for row in rows)
    meta = result.metadata
    lines.append(f"Page {meta.current_page + 1} of {max(meta.total_pages, 1)} ({meta.total_items} users)")
    return '\n'.join(lines)


def page_size_type(value: str) -> int:
    size = int(value)
    if size < 1:
        raise argparse.ArgumentTypeError(f"page size must be at least 1, got {value}")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='userdir', description='User directory client')
    parser.add_argument('--api-url', default=None, help='Base URL of the API, e.g. http://localhost:5001/api')
    sub = parser.add_subparsers(dest='command', required=True)

    list_parser = sub.add_parser('list', help='Show a page of users')
    list_parser.add_argument('--search', default='')
    list_parser.add_argument('--sort', choices=[f.value for f in SortField], default=SortField.FULL_NAME.value)
    list_parser.add_argument('--desc', action='store_true')
    list_parser.add_argument('--page', type=int, default=0, help='Zero based page index')
    list_parser.add_argument('--page-size', type=page_size_type, default=10)

    for name in ('create', 'update'):
        form_parser = sub.add_parser(name, help=f'{name.capitalize()} a user')
        if name == 'update':
            form_parser.add_argument('user_id', type=int)
        for option, _ in FORM_OPTIONS:
            form_parser.add_argument(f"--{option.replace('_', '-')}", dest=option, default=None)
        active = form_parser.add_mutually_exclusive_group()
        active.add_argument('--active', dest='is_active', action='store_true', default=None)
        active.add_argument('--inactive', dest='is_active', action='store_false', default=None)

    delete_parser = sub.add_parser('delete', help='Delete a user')
    delete_parser.add_argument('user_id', type=int)
    delete_parser.add_argument('--yes', action='store_true', help='Skip the confirmation prompt')
    return parser


def _form_values(args) -> dict:
    values = {wire: getattr(args, option) for option, wire in FORM_OPTIONS if getattr(args, option) is not None}
    if args.is_active is not None:
        values['isActive'] = args.is_active
    return values


def _print_form_errors(controller: UserListController, out):
    form = controller.form
    if form.submit_error:
        print(f"Error: {form.submit_error}", file=out)
    for field, message in sorted(form.errors.items()):
        print(f"  {field}: {message}", file=out)


def run(args, controller: UserListController, confirm: Callable[[str], str], out=sys.stdout) -> int:
    if args.command == 'list':
        controller.set_search(args.search)
        controller.set_sort(SortField(args.sort), SortDirection.DESC if args.desc else SortDirection.ASC)
        controller.set_page_size(args.page_size)
        controller.set_page(args.page)
        result = controller.view()
        if result is None:
            print(f"Error loading users: {controller.load_error}", file=out)
            return 1
        print(render_table(result), file=out)
        return 0

    if args.command in ('create', 'update'):
        if args.command == 'create':
            controller.form.open_new()
        else:
            try:
                controller.form.open_edit(controller.api.fetch_user(args.user_id))
            except ApiError as exc:
                print(f"Error: {exc.message}", file=out)
                return 1
        saved = controller.form.submit(_form_values(args))
        if saved is None:
            _print_form_errors(controller, out)
            return 1
        print(f"Saved user {saved.id}: {saved.full_name} <{saved.email}>", file=out)
        return 0

    controller.deletion.request(args.user_id)
    if not args.yes:
        answer = confirm(f"Delete user {args.user_id}? This action cannot be undone. [y/N] ")
        if answer.strip().lower() not in ('y', 'yes'):
            controller.deletion.cancel()
            print('Cancelled', file=out)
            return 0
    if not controller.deletion.confirm():
        print(f"Error: {controller.deletion.error}", file=out)
        return 1
    print(f"Deleted user {args.user_id}", file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    api = UserApiClient(base_url=args.api_url)
    try:
        return run(args, UserListController(api), confirm=input)
    finally:
        api.close()


if __name__ == '__main__':
    sys.exit(main())
