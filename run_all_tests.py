"""Run every app's test module through manage.py and print a summary."""
import re
import subprocess
import sys

TEST_MODULES = [
    'core.security.tests',
    'core.user_accounts.tests',
    'HR.career.tests',
    'HR.teams.tests',
    'HR.pdi.tests',
    'HR.assessment.tests',
    'HR.wellness.tests',
    'HR.dashboard.tests',
    'HR.action_groups.tests',
]


def run_tests(module):
    """Run one module and parse Django's runner output."""
    try:
        result = subprocess.run(
            [sys.executable, 'manage.py', 'test', module, '-v', '0'],
            capture_output=True,
            text=True,
            timeout=300
        )
    except subprocess.TimeoutExpired:
        return {'module': module, 'total': 0, 'failed': 0, 'status': 'TIMEOUT'}

    output = result.stdout + result.stderr
    match = re.search(r'Ran (\d+) test', output)
    if not match:
        return {'module': module, 'total': 0, 'failed': 0, 'status': 'NO TESTS'}

    total = int(match.group(1))
    failures = re.search(r'failures=(\d+)', output)
    errors = re.search(r'errors=(\d+)', output)
    failed = sum(int(m.group(1)) for m in (failures, errors) if m)
    return {
        'module': module,
        'total': total,
        'failed': failed,
        'status': 'FAILED' if result.returncode else 'OK',
    }


def main():
    print("=" * 80)
    print("PDI TEST SUITE SUMMARY")
    print("=" * 80)

    results = []
    for module in TEST_MODULES:
        print(f"Running {module}...", end=' ', flush=True)
        result = run_tests(module)
        results.append(result)
        print(f"{result['status']} - {result['total']} tests")

    total = sum(r['total'] for r in results)
    failed = sum(r['failed'] for r in results)

    print("=" * 80)
    print(f"Total Tests: {total}")
    print(f"Passed: {total - failed}")
    print(f"Failed: {failed}")
    print("-" * 80)
    for result in results:
        passed = result['total'] - result['failed']
        print(f"{result['status']:8} {result['module']:40} {passed:4}/{result['total']:4} passed")
    print("=" * 80)

    sys.exit(0 if failed == 0 and all(r['status'] == 'OK' for r in results) else 1)


if __name__ == '__main__':
    main()
